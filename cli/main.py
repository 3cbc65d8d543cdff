"""Command-line entry points for running, batching, and sweeping simulations."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any

# Allow `python cli/main.py ...` execution from IDEs by adding repo root to sys.path.
if __package__ in {None, ""}:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from configs.loader import Algorithm, ConfigLoader, ConfigValidationError, ExperimentConfig, OptimizationConfig
from experiments.sweep import build_sweep, count_combinations, run_experiments, run_sweep
from landscapes.base import NonFiniteCostError
from landscapes.catalog import (
    UnknownLandscapeError,
    allowed_algorithms,
    available_landscapes,
    get_landscape,
    resolve_algorithm,
)
from main import build_simulator


LOGGER = logging.getLogger(__name__)


def _experiment_from_args(args: argparse.Namespace) -> ExperimentConfig:
    if args.config:
        experiment = ConfigLoader.load(args.config)
    else:
        defaults = OptimizationConfig()
        experiment = ExperimentConfig(
            landscape=args.landscape,
            optimization=OptimizationConfig(
                algorithm=Algorithm.parse(args.algorithm or defaults.algorithm),
                step_size=args.step_size if args.step_size is not None else defaults.step_size,
                temperature=args.temperature if args.temperature is not None else defaults.temperature,
                population_size=args.population_size if args.population_size is not None else defaults.population_size,
                mutation_rate=args.mutation_rate if args.mutation_rate is not None else defaults.mutation_rate,
                max_iterations=args.max_iterations if args.max_iterations is not None else defaults.max_iterations,
            ),
            seed=args.seed,
        )

    algorithm = resolve_algorithm(experiment.landscape, experiment.optimization.algorithm)
    if algorithm is not experiment.optimization.algorithm:
        experiment = ExperimentConfig(
            landscape=experiment.landscape,
            optimization=experiment.optimization.replace(algorithm=algorithm),
            seed=experiment.seed,
            name=experiment.name,
        )
    return experiment


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


def _cmd_run(args: argparse.Namespace) -> int:
    experiment = _experiment_from_args(args)
    simulator = build_simulator(experiment)
    snapshot = simulator.run()
    payload: dict[str, Any] = {"experiment": experiment.to_dict(), "summary": simulator.summary().to_dict()}
    if args.snapshot:
        payload["snapshot"] = snapshot.to_dict()
    _print_json(payload)
    return 0


def _cmd_batch(args: argparse.Namespace) -> int:
    experiments = ConfigLoader.load_many(args.config)
    results = run_experiments(experiments)
    _print_json([result.to_dict() for result in results])
    return 0 if all(result.status == "completed" for result in results) else 1


def _cmd_sweep(args: argparse.Namespace) -> int:
    algorithm = resolve_algorithm(args.landscape, Algorithm.parse(args.algorithm))
    configs = build_sweep(algorithm)
    LOGGER.info(
        "Sweeping %d configuration(s) of %s on '%s' (research space %d)",
        len(configs),
        algorithm.value,
        args.landscape,
        count_combinations(algorithm, args.landscape),
    )
    results = run_sweep(configs, args.landscape, seed=args.seed, repeats=args.repeats)
    _print_json([result.to_dict() for result in results])
    return 0 if all(result.status == "completed" for result in results) else 1


def _cmd_landscapes(_args: argparse.Namespace) -> int:
    rows = []
    for name in available_landscapes():
        landscape = get_landscape(name)
        rows.append(
            {
                "name": landscape.name,
                "description": landscape.description,
                "bounds": [landscape.min_x, landscape.max_x, landscape.min_y, landscape.max_y],
                "global_min": landscape.global_min,
                "algorithms": [algorithm.value for algorithm in allowed_algorithms(name)],
            }
        )
    _print_json(rows)
    return 0


def run_cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="optima")
    parser.add_argument("--log-level", default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run")
    run_cmd.add_argument("--config")
    run_cmd.add_argument("--landscape", default="Convex Bowl")
    run_cmd.add_argument("--algorithm")
    run_cmd.add_argument("--step-size", type=float)
    run_cmd.add_argument("--temperature", type=float)
    run_cmd.add_argument("--population-size", type=int)
    run_cmd.add_argument("--mutation-rate", type=float)
    run_cmd.add_argument("--max-iterations", type=int)
    run_cmd.add_argument("--seed", type=int)
    run_cmd.add_argument("--snapshot", action="store_true")
    run_cmd.set_defaults(handler=_cmd_run)

    batch_cmd = sub.add_parser("batch")
    batch_cmd.add_argument("--config", default="configs/example_batch.yaml")
    batch_cmd.set_defaults(handler=_cmd_batch)

    sweep_cmd = sub.add_parser("sweep")
    sweep_cmd.add_argument("--landscape", default="Convex Bowl")
    sweep_cmd.add_argument("--algorithm", default=Algorithm.HILL_CLIMBING.value)
    sweep_cmd.add_argument("--seed", type=int)
    sweep_cmd.add_argument("--repeats", type=int, default=1)
    sweep_cmd.set_defaults(handler=_cmd_sweep)

    landscapes_cmd = sub.add_parser("landscapes")
    landscapes_cmd.set_defaults(handler=_cmd_landscapes)

    args = parser.parse_args(argv)
    logging.basicConfig(level=str(args.log_level).upper())

    try:
        return int(args.handler(args))
    except (ConfigValidationError, UnknownLandscapeError, NonFiniteCostError) as exc:
        LOGGER.error("%s", exc)
        return 2


if __name__ == "__main__":
    raise SystemExit(run_cli())
