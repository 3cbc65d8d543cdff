"""Agent value objects: a position plus its cached cost."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Iterable

from landscapes.base import Landscape


@dataclass(frozen=True)
class Agent:
    """Candidate solution on a landscape.

    ``value`` always equals the landscape cost at ``(x, y)``. Agents are never
    mutated; moving produces a new instance.
    """

    x: float
    y: float
    value: float

    @classmethod
    def at(cls, landscape: Landscape, x: float, y: float) -> "Agent":
        """Clamp ``(x, y)`` into ``landscape`` and evaluate it."""
        cx, cy = landscape.clamp(x, y)
        return cls(x=cx, y=cy, value=landscape.evaluate(cx, cy))

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "value": self.value}


def spawn_agents(landscape: Landscape, count: int, rng: random.Random) -> list[Agent]:
    """Draw ``count`` agents uniformly at random inside ``landscape``."""
    if count <= 0:
        raise ValueError("count must be > 0")
    agents: list[Agent] = []
    for _ in range(count):
        x = rng.random() * (landscape.max_x - landscape.min_x) + landscape.min_x
        y = rng.random() * (landscape.max_y - landscape.min_y) + landscape.min_y
        agents.append(Agent.at(landscape, x, y))
    return agents


def sort_by_value(agents: Iterable[Agent]) -> list[Agent]:
    """Return agents ordered lowest cost first; ties keep input order."""
    return sorted(agents, key=lambda agent: agent.value)
