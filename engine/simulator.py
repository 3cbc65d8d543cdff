"""Simulation driver: owns run state and applies one iteration per tick."""

from __future__ import annotations

import enum
import logging
import random
import threading
from collections import deque

from agents.point import Agent, sort_by_value, spawn_agents
from configs.loader import Algorithm, OptimizationConfig
from core.snapshot import HistoryPoint, RunSummary, SimulationSnapshot
from landscapes.base import Landscape, NonFiniteCostError
from search.base import StepParameters
from search.stepper import step_simulation


LOGGER = logging.getLogger(__name__)

TRAIL_CAP_SINGLE = 100
TRAIL_CAP_POPULATION = 20


def trail_cap(algorithm: Algorithm) -> int:
    """Sliding-window length of each agent trail for ``algorithm``."""
    return TRAIL_CAP_POPULATION if algorithm.is_population else TRAIL_CAP_SINGLE


class SimulatorState(str, enum.Enum):
    """Execution control states for tick stepping."""

    IDLE = "idle"
    RUNNING = "running"


class SimulatorExecutionError(RuntimeError):
    """Raised when one simulator lifecycle phase fails."""


class Simulator:
    """Drives a search algorithm over a landscape one tick at a time.

    The simulator only decides *what* a tick computes. When ticks fire is left
    to a scheduler (see ``engine.scheduler``) or to a caller invoking
    :meth:`tick` directly. Ticks are serialized by an internal lock, so one
    tick always completes before the next begins or a pause takes effect.

    Configuration edits made with :meth:`update_config` are picked up by the
    next tick without resetting state.
    """

    def __init__(
        self,
        landscape: Landscape,
        config: OptimizationConfig | None = None,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialize simulator dependencies; state is built by :meth:`reset`."""
        self.landscape = landscape
        self._config = config or OptimizationConfig()
        self.rng = rng or random.Random(seed)

        self.iteration: int = 0
        self.agents: list[Agent] = []
        self.best_point: Agent | None = None
        self.history: list[HistoryPoint] = []
        self.trails: list[deque[Agent]] = []

        self._state = SimulatorState.IDLE
        self._initialized = False
        self._lock = threading.Lock()

    @property
    def config(self) -> OptimizationConfig:
        return self._config

    @property
    def state(self) -> SimulatorState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is SimulatorState.RUNNING

    def update_config(self, config: OptimizationConfig) -> None:
        """Swap in ``config`` for subsequent ticks without touching run state."""
        config.validate()
        with self._lock:
            self._config = config
        LOGGER.debug("Configuration updated: %s", config.to_dict())

    def reset(self) -> None:
        """Discard run state and draw fresh agents; leaves the simulator idle."""
        config = self._config
        config.validate()
        cap = trail_cap(config.algorithm)

        with self._lock:
            agents = sort_by_value(spawn_agents(self.landscape, config.agent_count, self.rng))
            self.agents = agents
            self.iteration = 0
            self.best_point = agents[0]
            self.history = [HistoryPoint(iteration=0, cost=agents[0].value)]
            self.trails = [deque([agent], maxlen=cap) for agent in agents]
            self._state = SimulatorState.IDLE
            self._initialized = True

        LOGGER.info(
            "Reset %s on '%s' with %d agent(s); initial best %.6f",
            config.algorithm.value,
            self.landscape.name,
            len(agents),
            agents[0].value,
        )

    def start(self) -> None:
        """Begin ticking; no-op when already running."""
        if self.running:
            return
        self._config.validate()
        if not self._initialized:
            self.reset()
        with self._lock:
            if self._state is SimulatorState.RUNNING:
                return
            self._state = SimulatorState.RUNNING
            iteration = self.iteration
        LOGGER.info("Simulation started at iteration %d", iteration)

    def pause(self) -> None:
        """Halt ticking while preserving state."""
        with self._lock:
            if self._state is not SimulatorState.RUNNING:
                return
            self._state = SimulatorState.IDLE
        LOGGER.info("Simulation paused at iteration %d", self.iteration)

    def stop(self) -> None:
        """Alias of :meth:`pause`; state is kept until the next reset."""
        self.pause()

    def tick(self) -> bool:
        """Apply one iteration.

        Returns:
            bool: ``True`` when an iteration was applied, ``False`` when the
                simulator is idle or the iteration budget is exhausted (in
                which case it transitions to idle).

        Raises:
            NonFiniteCostError: The landscape produced NaN or infinity. State
                is left as it was before the tick and the simulator goes idle.
            SimulatorExecutionError: The search strategy failed otherwise.
        """
        with self._lock:
            if self._state is not SimulatorState.RUNNING:
                return False

            config = self._config
            if self.iteration >= config.max_iterations:
                self._state = SimulatorState.IDLE
                LOGGER.info("Iteration budget of %d reached", config.max_iterations)
                return False

            try:
                next_agents = step_simulation(
                    config.algorithm,
                    self.agents,
                    self.landscape,
                    self.iteration,
                    StepParameters.from_config(config),
                    self.rng,
                )
            except NonFiniteCostError:
                self._state = SimulatorState.IDLE
                LOGGER.error("Non-finite cost at iteration %d; simulation halted", self.iteration)
                raise
            except Exception as exc:
                self._state = SimulatorState.IDLE
                raise SimulatorExecutionError(f"Iteration {self.iteration} failed: {exc}") from exc

            self._append_trails(next_agents, trail_cap(config.algorithm))

            current_best = sort_by_value(next_agents)[0]
            if self.best_point is None or current_best.value < self.best_point.value:
                self.best_point = current_best

            self.history.append(HistoryPoint(iteration=self.iteration + 1, cost=current_best.value))
            self.agents = next_agents
            self.iteration += 1

        LOGGER.debug("Iteration %d best %.6f", self.iteration, current_best.value)
        return True

    def run(self, max_ticks: int | None = None) -> SimulationSnapshot:
        """Tick synchronously until the budget is spent or ``max_ticks`` ran."""
        if max_ticks is not None and max_ticks < 0:
            raise ValueError("max_ticks must be non-negative")
        self.start()
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            if not self.tick():
                break
            ticks += 1
        return self.snapshot()

    def snapshot(self) -> SimulationSnapshot:
        """Return an immutable copy of the current state."""
        with self._lock:
            return SimulationSnapshot(
                running=self._state is SimulatorState.RUNNING,
                iteration=self.iteration,
                agents=tuple(self.agents),
                best_point=self.best_point,
                history=tuple(self.history),
                trails=tuple(tuple(trail) for trail in self.trails),
            )

    def summary(self) -> RunSummary:
        """Summarize start cost, best cost and iteration count of the run."""
        with self._lock:
            if not self._initialized or self.best_point is None:
                raise SimulatorExecutionError("Simulator has no state; call reset() first.")
            return RunSummary(
                landscape=self.landscape.name,
                algorithm=self._config.algorithm.value,
                iterations=self.iteration,
                start_cost=self.history[0].cost,
                best_cost=self.best_point.value,
                best_x=self.best_point.x,
                best_y=self.best_point.y,
                global_min=self.landscape.global_min,
            )

    def _append_trails(self, next_agents: list[Agent], cap: int) -> None:
        if len(self.trails) != len(next_agents):
            self.trails = [deque([agent], maxlen=cap) for agent in next_agents]
            return
        for index, agent in enumerate(next_agents):
            trail = self.trails[index]
            if trail.maxlen != cap:
                trail = deque(trail, maxlen=cap)
                self.trails[index] = trail
            trail.append(agent)
