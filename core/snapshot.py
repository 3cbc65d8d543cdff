"""Immutable read-only views of simulation state for collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from agents.point import Agent


@dataclass(frozen=True)
class HistoryPoint:
    """Best cost within one iteration's population."""

    iteration: int
    cost: float


@dataclass(frozen=True)
class SimulationSnapshot:
    """Point-in-time copy of driver state, safe to hand to other threads."""

    running: bool
    iteration: int
    agents: tuple[Agent, ...]
    best_point: Agent | None
    history: tuple[HistoryPoint, ...]
    trails: tuple[tuple[Agent, ...], ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "running": self.running,
            "iteration": self.iteration,
            "agents": [agent.to_dict() for agent in self.agents],
            "best_point": None if self.best_point is None else self.best_point.to_dict(),
            "history": [{"iteration": point.iteration, "cost": point.cost} for point in self.history],
            "trails": [[agent.to_dict() for agent in trail] for trail in self.trails],
        }


@dataclass(frozen=True)
class RunSummary:
    """Headline figures of a run, as consumed by reporting and feedback tools."""

    landscape: str
    algorithm: str
    iterations: int
    start_cost: float
    best_cost: float
    best_x: float
    best_y: float
    global_min: float

    @property
    def improvement(self) -> float:
        return self.start_cost - self.best_cost

    def to_dict(self) -> dict[str, Any]:
        return {
            "landscape": self.landscape,
            "algorithm": self.algorithm,
            "iterations": self.iterations,
            "start_cost": self.start_cost,
            "best_cost": self.best_cost,
            "best_x": self.best_x,
            "best_y": self.best_y,
            "global_min": self.global_min,
            "improvement": self.improvement,
        }
