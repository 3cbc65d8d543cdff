"""Tests for landscape evaluation and the built-in catalog."""

from __future__ import annotations

import math

import pytest

from configs.loader import Algorithm
from landscapes.base import Landscape, NonFiniteCostError
from landscapes.catalog import (
    UnknownLandscapeError,
    allowed_algorithms,
    available_landscapes,
    get_landscape,
    resolve_algorithm,
)


def test_catalog_lists_builtin_landscapes() -> None:
    assert available_landscapes() == [
        "Convex Bowl",
        "Rastrigin Function",
        "Ackley Function",
        "Cognitive Sandbox",
    ]


@pytest.mark.parametrize("name", ["Convex Bowl", "Rastrigin Function", "Ackley Function"])
def test_global_minimum_at_origin(name: str) -> None:
    landscape = get_landscape(name)
    assert landscape.evaluate(0.0, 0.0) == pytest.approx(landscape.global_min, abs=1e-9)


def test_convex_bowl_matches_sum_of_squares() -> None:
    bowl = get_landscape("Convex Bowl")
    assert bowl.evaluate(3.0, -4.0) == pytest.approx(25.0)
    assert (bowl.min_x, bowl.max_x, bowl.min_y, bowl.max_y) == (-5.0, 5.0, -5.0, 5.0)


def test_unknown_landscape_lists_available() -> None:
    with pytest.raises(UnknownLandscapeError, match="Convex Bowl"):
        get_landscape("Flatland")


def test_cognitive_sandbox_restricts_algorithms() -> None:
    assert allowed_algorithms("Cognitive Sandbox") == (Algorithm.SIMULATED_ANNEALING, Algorithm.GENETIC)
    assert set(allowed_algorithms("Convex Bowl")) == set(Algorithm)


def test_resolve_algorithm_switches_to_first_allowed() -> None:
    assert resolve_algorithm("Cognitive Sandbox", Algorithm.GREEDY) is Algorithm.SIMULATED_ANNEALING
    assert resolve_algorithm("Cognitive Sandbox", Algorithm.GENETIC) is Algorithm.GENETIC
    assert resolve_algorithm("Rastrigin Function", Algorithm.GREEDY) is Algorithm.GREEDY


def test_landscape_rejects_degenerate_bounds() -> None:
    with pytest.raises(ValueError, match="min_x < max_x"):
        Landscape(name="bad", description="", func=lambda x, y: 0.0, min_x=1.0, max_x=1.0, min_y=0.0, max_y=1.0)
    with pytest.raises(ValueError, match="min_y < max_y"):
        Landscape(name="bad", description="", func=lambda x, y: 0.0, min_x=0.0, max_x=1.0, min_y=2.0, max_y=1.0)


def test_clamp_and_contains() -> None:
    bowl = get_landscape("Convex Bowl")
    assert bowl.clamp(7.0, -9.0) == (5.0, -5.0)
    assert bowl.clamp(1.5, 2.5) == (1.5, 2.5)
    assert bowl.contains(5.0, -5.0)
    assert not bowl.contains(5.0001, 0.0)


@pytest.mark.parametrize("bad_value", [math.nan, math.inf, -math.inf])
def test_non_finite_cost_is_rejected(bad_value: float) -> None:
    landscape = Landscape(
        name="broken",
        description="",
        func=lambda x, y: bad_value,
        min_x=-1.0,
        max_x=1.0,
        min_y=-1.0,
        max_y=1.0,
    )
    with pytest.raises(NonFiniteCostError, match="broken"):
        landscape.evaluate(0.0, 0.0)
