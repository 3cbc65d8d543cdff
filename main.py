"""Simple headless runner for local validation."""

from __future__ import annotations

import json

from configs.loader import ConfigLoader, ExperimentConfig
from core.deterministic_rng import DeterministicRNG
from engine.simulator import Simulator
from landscapes.catalog import get_landscape


def build_simulator(experiment: ExperimentConfig, rng: DeterministicRNG | None = None) -> Simulator:
    """Build a reset simulator from an experiment configuration."""
    landscape = get_landscape(experiment.landscape)
    streams = rng or DeterministicRNG(experiment.seed)
    simulator = Simulator(
        landscape=landscape,
        config=experiment.optimization,
        rng=streams.stream("simulation"),
    )
    simulator.reset()
    return simulator


def main(config_path: str = "configs/example_experiment.yaml") -> None:
    """Load config, run the simulation to its budget, and print a summary."""
    experiment = ConfigLoader.load(config_path)
    simulator = build_simulator(experiment)
    simulator.run()
    print(json.dumps(simulator.summary().to_dict(), indent=2))


if __name__ == "__main__":
    main()
