"""Registry of built-in landscapes and their algorithm restrictions."""

from __future__ import annotations

import logging
import math

from configs.loader import Algorithm
from landscapes.base import Landscape


LOGGER = logging.getLogger(__name__)


class UnknownLandscapeError(KeyError):
    """Raised when a landscape name is not registered."""


_LANDSCAPES: dict[str, Landscape] = {}
_RESTRICTIONS: dict[str, tuple[Algorithm, ...]] = {}


def register_landscape(landscape: Landscape, allowed: tuple[Algorithm, ...] | None = None) -> None:
    """Register ``landscape`` under its name, optionally restricting algorithms."""
    _LANDSCAPES[landscape.name] = landscape
    if allowed:
        _RESTRICTIONS[landscape.name] = tuple(allowed)
    else:
        _RESTRICTIONS.pop(landscape.name, None)


def available_landscapes() -> list[str]:
    return list(_LANDSCAPES)


def get_landscape(name: str) -> Landscape:
    landscape = _LANDSCAPES.get(str(name))
    if landscape is None:
        available = ", ".join(available_landscapes()) or "<none>"
        raise UnknownLandscapeError(f"Unknown landscape '{name}'. Available: {available}")
    return landscape


def allowed_algorithms(name: str) -> tuple[Algorithm, ...]:
    """Return algorithms the UI layer should offer for landscape ``name``.

    The simulation engine itself runs any algorithm on any landscape; this
    restriction is applied by callers that present choices to a user.
    """
    get_landscape(name)
    return _RESTRICTIONS.get(str(name), tuple(Algorithm))


def resolve_algorithm(name: str, algorithm: Algorithm) -> Algorithm:
    """Return ``algorithm`` if allowed on ``name``, else the first allowed one."""
    allowed = allowed_algorithms(name)
    if algorithm in allowed:
        return algorithm
    LOGGER.warning(
        "Algorithm %s is not offered on landscape '%s'; switching to %s",
        algorithm.value,
        name,
        allowed[0].value,
    )
    return allowed[0]


def _convex_bowl(x: float, y: float) -> float:
    return x * x + y * y


def _rastrigin(x: float, y: float) -> float:
    a = 10.0
    return a * 2 + (x * x - a * math.cos(2 * math.pi * x)) + (y * y - a * math.cos(2 * math.pi * y))


def _ackley(x: float, y: float) -> float:
    return (
        -20.0 * math.exp(-0.2 * math.sqrt(0.5 * (x * x + y * y)))
        - math.exp(0.5 * (math.cos(2 * math.pi * x) + math.cos(2 * math.pi * y)))
        + math.e
        + 20.0
    )


def _cognitive_sandbox(x: float, y: float) -> float:
    # Schwefel-like basins plus a high-frequency spike term, rescaled.
    base = 418.9829 * 2 - (x * math.sin(math.sqrt(abs(x))) + y * math.sin(math.sqrt(abs(y))))
    anomalies = math.sin(x * 5) * math.cos(y * 5) * 50
    return (base + anomalies) / 10 + 200


CONVEX_BOWL = Landscape(
    name="Convex Bowl",
    description="A simple convex function. Easy for any algorithm to find the bottom.",
    func=_convex_bowl,
    min_x=-5.0,
    max_x=5.0,
    min_y=-5.0,
    max_y=5.0,
    global_min=0.0,
)

RASTRIGIN = Landscape(
    name="Rastrigin Function",
    description="Many local minima. A nightmare for greedy algorithms, perfect for testing exploration.",
    func=_rastrigin,
    min_x=-5.12,
    max_x=5.12,
    min_y=-5.12,
    max_y=5.12,
    global_min=0.0,
)

ACKLEY = Landscape(
    name="Ackley Function",
    description="A large hole with many small bumps. Requires a mix of global search and local refinement.",
    func=_ackley,
    min_x=-5.0,
    max_x=5.0,
    min_y=-5.0,
    max_y=5.0,
    global_min=0.0,
)

COGNITIVE_SANDBOX = Landscape(
    name="Cognitive Sandbox",
    description="High complexity with deep emergent basins and sharp anomaly spikes.",
    func=_cognitive_sandbox,
    min_x=-500.0,
    max_x=500.0,
    min_y=-500.0,
    max_y=500.0,
    global_min=0.0,
)


def _register_defaults() -> None:
    if _LANDSCAPES:
        return
    register_landscape(CONVEX_BOWL)
    register_landscape(RASTRIGIN)
    register_landscape(ACKLEY)
    register_landscape(
        COGNITIVE_SANDBOX,
        allowed=(Algorithm.SIMULATED_ANNEALING, Algorithm.GENETIC),
    )


_register_defaults()
