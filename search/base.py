"""Search strategy contracts."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from agents.point import Agent
from configs.loader import OptimizationConfig
from landscapes.base import Landscape


@dataclass(frozen=True)
class StepParameters:
    """Numeric parameters a strategy reads on each step."""

    step_size: float
    temperature: float
    mutation_rate: float

    @classmethod
    def from_config(cls, config: OptimizationConfig) -> "StepParameters":
        return cls(
            step_size=float(config.step_size),
            temperature=float(config.temperature),
            mutation_rate=float(config.mutation_rate),
        )


class SearchStrategy(ABC):
    """Abstract interface for one iteration of a search algorithm.

    Strategies hold no run state. Every draw comes from the ``rng`` argument so
    a seeded generator reproduces a run exactly.
    """

    @abstractmethod
    def step(
        self,
        agents: Sequence[Agent],
        landscape: Landscape,
        iteration: int,
        params: StepParameters,
        rng: random.Random,
    ) -> list[Agent]:
        """Generate the next agents from the current ones.

        Args:
            agents (Sequence[Agent]): Current agents; must be non-empty.
            landscape (Landscape): Cost surface to evaluate on.
            iteration (int): Zero-based index of the iteration being computed.
            params (StepParameters): Step size, temperature and mutation rate.
            rng (random.Random): Source for every random draw.

        Returns:
            list[Agent]: Next agents.

        Invariants:
            - Output length must equal input length.
            - Must not mutate the input sequence or its agents.
            - Every returned position lies inside the landscape bounds.
        """
