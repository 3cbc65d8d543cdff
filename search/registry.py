"""Algorithm to search strategy factory registry."""

from __future__ import annotations

from typing import Callable

from configs.loader import Algorithm
from search.annealing import SimulatedAnnealingStrategy
from search.base import SearchStrategy
from search.genetic import GeneticEvolutionStrategy
from search.hill_climbing import HillClimbingStrategy


StrategyFactory = Callable[[], SearchStrategy]


_STRATEGY_FACTORIES: dict[Algorithm, StrategyFactory] = {}


def register_strategy_factory(algorithm: Algorithm | str, factory: StrategyFactory) -> None:
    _STRATEGY_FACTORIES[Algorithm.parse(algorithm)] = factory


def available_strategies() -> list[str]:
    return sorted(algorithm.value for algorithm in _STRATEGY_FACTORIES)


def create_strategy(algorithm: Algorithm | str) -> SearchStrategy:
    factory = _STRATEGY_FACTORIES.get(Algorithm.parse(algorithm))
    if factory is None:
        available = ", ".join(available_strategies()) or "<none>"
        raise ValueError(f"Unknown search strategy '{algorithm}'. Available: {available}")
    return factory()


def _register_defaults() -> None:
    if _STRATEGY_FACTORIES:
        return
    # Greedy and hill climbing share one rule.
    register_strategy_factory(Algorithm.GREEDY, HillClimbingStrategy)
    register_strategy_factory(Algorithm.HILL_CLIMBING, HillClimbingStrategy)
    register_strategy_factory(Algorithm.SIMULATED_ANNEALING, SimulatedAnnealingStrategy)
    register_strategy_factory(Algorithm.GENETIC, GeneticEvolutionStrategy)


_register_defaults()
