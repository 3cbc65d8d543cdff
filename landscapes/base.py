"""Landscape contracts for two-dimensional cost surfaces."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable


CostFunction = Callable[[float, float], float]


class NonFiniteCostError(ValueError):
    """Raised when a landscape function returns NaN or infinity."""


@dataclass(frozen=True)
class Landscape:
    """Immutable scalar cost function over a closed rectangular domain.

    ``func`` must be pure and total over ``[min_x, max_x] x [min_y, max_y]``.
    Callers clamp positions with :meth:`clamp` before evaluating, so the
    function is never invoked outside its domain. ``global_min`` is a
    reference value for display only.
    """

    name: str
    description: str
    func: CostFunction
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    global_min: float = 0.0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Landscape name must be non-empty.")
        if not self.min_x < self.max_x:
            raise ValueError(f"Landscape '{self.name}' requires min_x < max_x.")
        if not self.min_y < self.max_y:
            raise ValueError(f"Landscape '{self.name}' requires min_y < max_y.")

    def clamp(self, x: float, y: float) -> tuple[float, float]:
        """Clamp a position into the landscape bounds."""
        return (
            min(max(x, self.min_x), self.max_x),
            min(max(y, self.min_y), self.max_y),
        )

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def evaluate(self, x: float, y: float) -> float:
        """Evaluate the cost at ``(x, y)``.

        Raises:
            NonFiniteCostError: If the cost function returns NaN or infinity.
        """
        value = float(self.func(x, y))
        if not math.isfinite(value):
            raise NonFiniteCostError(
                f"Landscape '{self.name}' returned non-finite cost {value!r} at ({x!r}, {y!r})."
            )
        return value
