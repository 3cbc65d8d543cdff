"""Configuration loading and validation utilities for optimization runs."""

from __future__ import annotations

import dataclasses
import enum
import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml


class ConfigValidationError(ValueError):
    """Raised when an optimization configuration fails validation."""


class Algorithm(str, enum.Enum):
    """Search strategies supported by the stepper."""

    GREEDY = "GREEDY"
    HILL_CLIMBING = "HILL_CLIMBING"
    SIMULATED_ANNEALING = "SIMULATED_ANNEALING"
    GENETIC = "GENETIC"

    @classmethod
    def parse(cls, value: Any) -> "Algorithm":
        """Return the algorithm named by ``value``.

        Accepts enum members and case-insensitive names where spaces and
        hyphens stand in for underscores (``"hill-climbing"``).
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError as exc:
            available = ", ".join(member.value for member in cls)
            raise ConfigValidationError(f"Unknown algorithm '{value}'. Available: {available}") from exc

    @property
    def is_population(self) -> bool:
        return self is Algorithm.GENETIC


# Original camelCase field names accepted when reading config files.
_ALIASES: dict[str, str] = {
    "algo": "algorithm",
    "learningRate": "step_size",
    "learning_rate": "step_size",
    "stepSize": "step_size",
    "populationSize": "population_size",
    "mutationRate": "mutation_rate",
    "maxIterations": "max_iterations",
    "landscapeName": "landscape",
}


@dataclass(frozen=True)
class OptimizationConfig:
    """Validated optimization run configuration.

    ``temperature`` is read only by simulated annealing; ``population_size``
    and ``mutation_rate`` only by the genetic variant. Every other algorithm
    runs a single agent. Instances are validated on construction, so an
    invalid configuration is rejected before any simulation state exists.
    """

    algorithm: Algorithm = Algorithm.HILL_CLIMBING
    step_size: float = 0.1
    temperature: float = 100.0
    population_size: int = 20
    mutation_rate: float = 0.1
    max_iterations: int = 100

    def __post_init__(self) -> None:
        object.__setattr__(self, "algorithm", Algorithm.parse(self.algorithm))
        self.validate()

    def validate(self) -> None:
        """Raise ``ConfigValidationError`` when any field is out of range."""
        if not math.isfinite(self.step_size) or self.step_size < 0:
            raise ConfigValidationError("step_size must be a finite value >= 0")
        if not math.isfinite(self.temperature) or self.temperature < 0:
            raise ConfigValidationError("temperature must be a finite value >= 0")
        if not _is_integer(self.population_size) or self.population_size <= 0:
            raise ConfigValidationError("population_size must be an integer > 0")
        if not math.isfinite(self.mutation_rate) or not 0.0 <= self.mutation_rate <= 1.0:
            raise ConfigValidationError("mutation_rate must be in [0.0, 1.0]")
        if not _is_integer(self.max_iterations) or self.max_iterations < 0:
            raise ConfigValidationError("max_iterations must be an integer >= 0")

    @property
    def agent_count(self) -> int:
        """Number of agents a run with this configuration maintains."""
        return self.population_size if self.algorithm.is_population else 1

    def replace(self, **changes: Any) -> "OptimizationConfig":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "algorithm": self.algorithm.value,
            "step_size": self.step_size,
            "temperature": self.temperature,
            "population_size": self.population_size,
            "mutation_rate": self.mutation_rate,
            "max_iterations": self.max_iterations,
        }

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "OptimizationConfig":
        """Build a configuration from a plain mapping, ignoring unknown keys."""
        normalized = _normalize_keys(payload)
        defaults = cls()
        try:
            return cls(
                algorithm=Algorithm.parse(normalized.get("algorithm", defaults.algorithm)),
                step_size=float(normalized.get("step_size", defaults.step_size)),
                temperature=float(normalized.get("temperature", defaults.temperature)),
                population_size=int(normalized.get("population_size", defaults.population_size)),
                mutation_rate=float(normalized.get("mutation_rate", defaults.mutation_rate)),
                max_iterations=int(normalized.get("max_iterations", defaults.max_iterations)),
            )
        except ConfigValidationError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigValidationError(f"Invalid configuration value: {exc}") from exc


@dataclass(frozen=True)
class ExperimentConfig:
    """A configuration paired with the landscape it runs on.

    This is the plain pair external tooling stores and reloads; ``seed`` is
    optional and ``None`` means an unseeded run.
    """

    landscape: str
    optimization: OptimizationConfig = field(default_factory=OptimizationConfig)
    seed: int | None = None
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"landscape": self.landscape, "seed": self.seed}
        if self.name is not None:
            payload["name"] = self.name
        payload.update(self.optimization.to_dict())
        return payload


class ConfigLoader:
    """Load and validate experiment configuration files (YAML or JSON)."""

    @staticmethod
    def load(path: str | Path) -> ExperimentConfig:
        """Load a single experiment config from ``path``.

        Args:
            path: Path to a YAML or JSON config file.

        Returns:
            A validated ``ExperimentConfig`` instance.
        """
        payload = _read_config_payload(path)
        if not isinstance(payload, Mapping):
            raise ConfigValidationError("Single config file must contain a mapping object.")
        return _validate_and_build(payload)

    @staticmethod
    def load_many(path: str | Path) -> list[ExperimentConfig]:
        """Load one or many experiment configs from ``path``.

        Supports:
            - top-level mapping for single experiment
            - top-level list of mappings
            - top-level mapping with an ``experiments`` list
        """
        payload = _read_config_payload(path)

        if isinstance(payload, list):
            return [_validate_and_build(item) for item in payload]

        if isinstance(payload, Mapping) and "experiments" in payload:
            experiments = payload["experiments"]
            if not isinstance(experiments, list):
                raise ConfigValidationError("'experiments' must be a list of mappings.")
            return [_validate_and_build(item) for item in experiments]

        if isinstance(payload, Mapping):
            return [_validate_and_build(payload)]

        raise ConfigValidationError("Unsupported config file structure.")


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _normalize_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    return {_ALIASES.get(str(key), str(key)): value for key, value in payload.items()}


def _read_config_payload(path: str | Path) -> Any:
    """Read raw config payload from JSON or YAML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigValidationError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    content = config_path.read_text(encoding="utf-8")

    try:
        if suffix == ".json":
            return json.loads(content)
        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(f"Failed to parse config '{config_path}': {exc}") from exc

    raise ConfigValidationError(f"Unsupported config extension: {suffix}")


def _validate_and_build(payload: Any) -> ExperimentConfig:
    """Validate raw mapping and build ``ExperimentConfig``."""
    if not isinstance(payload, Mapping):
        raise ConfigValidationError("Each experiment entry must be a mapping.")

    normalized = _normalize_keys(payload)
    landscape = normalized.get("landscape")
    if not isinstance(landscape, str) or not landscape:
        raise ConfigValidationError("Missing required config key: landscape")

    raw_seed = normalized.get("seed")
    try:
        seed = None if raw_seed is None else int(raw_seed)
    except (TypeError, ValueError) as exc:
        raise ConfigValidationError(f"seed must be an integer, got {raw_seed!r}") from exc

    name = normalized.get("name")
    return ExperimentConfig(
        landscape=landscape,
        optimization=OptimizationConfig.from_mapping(normalized),
        seed=seed,
        name=None if name is None else str(name),
    )
