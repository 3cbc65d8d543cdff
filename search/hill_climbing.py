"""Greedy four-direction hill climbing."""

from __future__ import annotations

import random
from typing import Sequence

from agents.point import Agent
from landscapes.base import Landscape
from search.base import SearchStrategy, StepParameters


class HillClimbingStrategy(SearchStrategy):
    """Move each agent to the best of its four axis-aligned neighbours.

    Candidates are tried in the order ``+x, -x, +y, -y`` and compared with
    strict less-than against the best found so far, starting from the agent
    itself. A later direction therefore only wins when it beats an earlier
    improving direction, and ties never cause movement.
    """

    def step(
        self,
        agents: Sequence[Agent],
        landscape: Landscape,
        iteration: int,
        params: StepParameters,
        rng: random.Random,
    ) -> list[Agent]:
        step = params.step_size
        directions = ((step, 0.0), (-step, 0.0), (0.0, step), (0.0, -step))

        next_agents: list[Agent] = []
        for agent in agents:
            best = agent
            for dx, dy in directions:
                candidate = Agent.at(landscape, agent.x + dx, agent.y + dy)
                if candidate.value < best.value:
                    best = candidate
            next_agents.append(best)
        return next_agents
