"""Parameter sweeps over the research option grid."""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from configs.loader import Algorithm, ExperimentConfig, OptimizationConfig
from core.deterministic_rng import DeterministicRNG
from core.snapshot import RunSummary
from engine.simulator import Simulator
from landscapes.catalog import allowed_algorithms, get_landscape


LOGGER = logging.getLogger(__name__)


RESEARCH_OPTIONS: dict[str, tuple[Any, ...]] = {
    "step_sizes": (0.01, 0.05, 0.1, 0.5, 1.0),
    "temperatures": (10.0, 50.0, 100.0, 500.0, 1000.0),
    "population_sizes": (10, 20, 50, 100),
    "mutation_rates": (0.01, 0.05, 0.1, 0.2, 0.5),
    "max_iterations": (50, 100, 200, 500),
}


@dataclass(frozen=True)
class SweepResult:
    """Outcome of one sweep run."""

    run_id: str
    config: OptimizationConfig
    status: str
    summary: RunSummary | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "status": self.status,
            "config": self.config.to_dict(),
            "summary": None if self.summary is None else self.summary.to_dict(),
            "error": self.error,
        }


def count_combinations(
    algorithm: Algorithm,
    landscape: str,
    options: Mapping[str, Sequence[Any]] = RESEARCH_OPTIONS,
) -> int:
    """Size of the research space for ``algorithm`` on ``landscape``.

    Counts every algorithm offered on the landscape times the shared step size
    and budget grids, times the parameters specific to ``algorithm``.
    """
    total = len(allowed_algorithms(landscape))
    total *= len(options["step_sizes"])
    total *= len(options["max_iterations"])
    if algorithm is Algorithm.SIMULATED_ANNEALING:
        total *= len(options["temperatures"])
    elif algorithm is Algorithm.GENETIC:
        total *= len(options["population_sizes"])
        total *= len(options["mutation_rates"])
    return total


def build_sweep(
    algorithm: Algorithm,
    base: OptimizationConfig | None = None,
    options: Mapping[str, Sequence[Any]] = RESEARCH_OPTIONS,
) -> list[OptimizationConfig]:
    """Expand the option grid into configurations for ``algorithm``.

    Fields the algorithm does not read keep the values of ``base``.
    """
    template = (base or OptimizationConfig()).replace(algorithm=algorithm)

    grid: dict[str, Sequence[Any]] = {
        "step_size": options["step_sizes"],
        "max_iterations": options["max_iterations"],
    }
    if algorithm is Algorithm.SIMULATED_ANNEALING:
        grid["temperature"] = options["temperatures"]
    elif algorithm is Algorithm.GENETIC:
        grid["population_size"] = options["population_sizes"]
        grid["mutation_rate"] = options["mutation_rates"]

    keys = list(grid)
    return [template.replace(**dict(zip(keys, combo))) for combo in itertools.product(*(grid[k] for k in keys))]


def run_sweep(
    configs: Sequence[OptimizationConfig],
    landscape: str,
    seed: int | None = None,
    repeats: int = 1,
) -> list[SweepResult]:
    """Run every configuration headless ``repeats`` times and collect summaries.

    Each run draws from its own named stream of one ``DeterministicRNG`` so a
    seeded sweep is reproducible run by run.
    """
    if repeats < 1:
        raise ValueError("repeats must be >= 1")

    surface = get_landscape(landscape)
    streams = DeterministicRNG(seed)
    results: list[SweepResult] = []
    counter = 0
    for config in configs:
        for _ in range(repeats):
            counter += 1
            run_id = f"run-{counter:04d}"
            simulator = Simulator(landscape=surface, config=config, rng=streams.stream(run_id))
            try:
                simulator.reset()
                simulator.run()
            except (ValueError, RuntimeError) as exc:
                LOGGER.exception("Sweep run %s failed", run_id)
                results.append(SweepResult(run_id=run_id, config=config, status="failed", error=str(exc)))
                continue
            summary = simulator.summary()
            LOGGER.info("Sweep run %s best %.6f after %d iterations", run_id, summary.best_cost, summary.iterations)
            results.append(SweepResult(run_id=run_id, config=config, status="completed", summary=summary))
    return results


def run_experiments(experiments: Sequence[ExperimentConfig]) -> list[SweepResult]:
    """Run a batch of loaded experiment configurations, one result each."""
    results: list[SweepResult] = []
    for index, experiment in enumerate(experiments, start=1):
        run_id = experiment.name or f"experiment-{index:04d}"
        outcome = run_sweep([experiment.optimization], experiment.landscape, seed=experiment.seed)[0]
        results.append(
            SweepResult(
                run_id=run_id,
                config=outcome.config,
                status=outcome.status,
                summary=outcome.summary,
                error=outcome.error,
            )
        )
    return results
