"""Pure single-iteration entry point shared by the driver and tooling."""

from __future__ import annotations

import random
from typing import Sequence

from agents.point import Agent
from configs.loader import Algorithm
from search.registry import create_strategy
from landscapes.base import Landscape
from search.base import StepParameters


def step_simulation(
    algorithm: Algorithm | str,
    agents: Sequence[Agent],
    landscape: Landscape,
    iteration: int,
    params: StepParameters,
    rng: random.Random,
) -> list[Agent]:
    """Advance ``agents`` by one iteration of ``algorithm``.

    Raises:
        ValueError: If ``agents`` is empty, ``iteration`` is negative, or the
            strategy changes the number of agents.
        NonFiniteCostError: If the landscape yields a non-finite cost.
    """
    if not agents:
        raise ValueError("step_simulation requires at least one agent.")
    if iteration < 0:
        raise ValueError("iteration must be non-negative")

    strategy = create_strategy(algorithm)
    next_agents = strategy.step(agents, landscape, iteration, params, rng)
    if len(next_agents) != len(agents):
        raise ValueError("Search strategy must preserve the number of agents.")
    return next_agents
