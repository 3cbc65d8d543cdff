"""Elitist genetic search with midpoint crossover."""

from __future__ import annotations

import math
import random
from typing import Sequence

from agents.point import Agent, sort_by_value
from landscapes.base import Landscape
from search.base import SearchStrategy, StepParameters


ELITE_FRACTION = 0.2


def elite_count(population_size: int) -> int:
    return math.floor(population_size * ELITE_FRACTION)


def parent_pool_size(population_size: int) -> int:
    """Size of the better-half selection pool, never below one."""
    return max(1, population_size // 2)


class GeneticEvolutionStrategy(SearchStrategy):
    """Elitism, better-half selection, midpoint crossover and uniform mutation.

    The top ``floor(n * 0.2)`` agents are carried forward as the same objects.
    Remaining slots are filled with children of two parents drawn with
    replacement from the better half, so a parent may be paired with itself.
    """

    def step(
        self,
        agents: Sequence[Agent],
        landscape: Landscape,
        iteration: int,
        params: StepParameters,
        rng: random.Random,
    ) -> list[Agent]:
        if not agents:
            raise ValueError("Genetic step requires a non-empty population.")

        population_size = len(agents)
        ranked = sort_by_value(agents)
        next_population = ranked[: elite_count(population_size)]

        pool = parent_pool_size(population_size)
        spread = params.step_size * 2
        while len(next_population) < population_size:
            parent_a = ranked[rng.randrange(pool)]
            parent_b = ranked[rng.randrange(pool)]

            child_x = (parent_a.x + parent_b.x) / 2
            child_y = (parent_a.y + parent_b.y) / 2

            if rng.random() < params.mutation_rate:
                child_x += rng.uniform(-spread, spread)
                child_y += rng.uniform(-spread, spread)

            next_population.append(Agent.at(landscape, child_x, child_y))
        return next_population
