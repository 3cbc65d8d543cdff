"""Simulated annealing with a hyperbolic cooling schedule."""

from __future__ import annotations

import math
import random
from typing import Sequence

from agents.point import Agent
from landscapes.base import Landscape
from search.base import SearchStrategy, StepParameters


COOLING_RATE = 0.1

# math.exp underflows to 0.0 well before this; clamp instead of computing.
_MIN_EXPONENT = -700.0


def temperature_at(initial_temperature: float, iteration: int) -> float:
    """Return the effective temperature ``T0 / (1 + 0.1 * iteration)``."""
    return initial_temperature / (1.0 + COOLING_RATE * iteration)


def acceptance_probability(delta: float, temperature: float) -> float:
    """Metropolis probability of accepting a move that changes cost by ``delta``."""
    if delta < 0:
        return 1.0
    if temperature <= 0:
        return 0.0
    exponent = -delta / temperature
    if exponent < _MIN_EXPONENT:
        return 0.0
    return math.exp(exponent)


class SimulatedAnnealingStrategy(SearchStrategy):
    """Propose one random neighbour per agent and apply the Metropolis rule."""

    def step(
        self,
        agents: Sequence[Agent],
        landscape: Landscape,
        iteration: int,
        params: StepParameters,
        rng: random.Random,
    ) -> list[Agent]:
        temperature = temperature_at(params.temperature, iteration)

        next_agents: list[Agent] = []
        for agent in agents:
            angle = rng.random() * math.pi * 2
            candidate = Agent.at(
                landscape,
                agent.x + math.cos(angle) * params.step_size,
                agent.y + math.sin(angle) * params.step_size,
            )
            delta = candidate.value - agent.value
            # The acceptance draw is only consumed for non-improving moves.
            if delta < 0 or rng.random() < acceptance_probability(delta, temperature):
                next_agents.append(candidate)
            else:
                next_agents.append(agent)
        return next_agents
