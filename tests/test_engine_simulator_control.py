from __future__ import annotations

import threading
import time

from configs.loader import Algorithm, OptimizationConfig
from core.deterministic_rng import DeterministicRNG
from engine.scheduler import MIN_PERIOD_MS, TickScheduler
from engine.simulator import Simulator
from landscapes.base import Landscape
from landscapes.catalog import get_landscape


def _build_simulator(seed: int = 11, max_iterations: int = 100_000, **changes) -> Simulator:
    simulator = Simulator(
        landscape=get_landscape("Ackley Function"),
        config=OptimizationConfig(max_iterations=max_iterations, **changes),
        rng=DeterministicRNG(seed).stream("simulation"),
    )
    simulator.reset()
    return simulator


def test_scheduler_runs_to_budget_and_completes() -> None:
    updates: list[dict] = []
    completions: list[dict] = []
    sim = _build_simulator(max_iterations=12, algorithm=Algorithm.GENETIC, population_size=10)

    scheduler = TickScheduler(sim, on_update=updates.append, on_complete=completions.append, period_ms=1)
    scheduler.start()
    scheduler.join(timeout=5)

    tick_events = [u for u in updates if u.get("event") == "tick"]
    assert len(tick_events) == 12
    assert [event["snapshot"].iteration for event in tick_events] == list(range(1, 13))
    assert len(completions) == 1
    assert completions[0]["paused"] is False
    assert completions[0]["iteration"] == 12
    assert not sim.running


def test_scheduler_pause_preserves_state_and_resumes() -> None:
    updates: list[dict] = []
    sim = _build_simulator()
    scheduler = TickScheduler(sim, on_update=updates.append, period_ms=2)

    scheduler.start()
    time.sleep(0.05)
    scheduler.pause()
    scheduler.join(timeout=2)

    paused_at = sim.iteration
    assert paused_at > 0
    assert not sim.running
    time.sleep(0.05)
    assert sim.iteration == paused_at
    assert any(u.get("event") == "complete" and u["paused"] for u in updates)

    scheduler.start()
    time.sleep(0.05)
    scheduler.stop()

    assert sim.iteration > paused_at
    assert not scheduler.is_alive()


def test_scheduler_period_is_adjustable_and_bounded() -> None:
    scheduler = TickScheduler(_build_simulator(), period_ms=50)
    assert scheduler.period_ms == 50

    scheduler.set_period(0)
    assert scheduler.period_ms == MIN_PERIOD_MS

    scheduler.set_period(250)
    assert scheduler.period_ms == 250


def test_set_period_changes_rate_of_running_loop() -> None:
    sim = _build_simulator()
    scheduler = TickScheduler(sim, period_ms=10_000)

    scheduler.start()
    time.sleep(0.05)
    assert sim.iteration == 1

    scheduler.set_period(1)
    time.sleep(0.2)
    scheduler.stop()

    assert sim.iteration > 5
    assert not scheduler.is_alive()


def test_scheduler_reports_tick_errors() -> None:
    poisoned = threading.Event()

    def cost(x: float, y: float) -> float:
        return float("inf") if poisoned.is_set() else x * x + y * y

    landscape = Landscape(name="poisoned", description="", func=cost, min_x=-1.0, max_x=1.0, min_y=-1.0, max_y=1.0)
    sim = Simulator(landscape=landscape, config=OptimizationConfig(max_iterations=1000), seed=5)
    sim.reset()
    poisoned.set()

    updates: list[dict] = []
    scheduler = TickScheduler(sim, on_update=updates.append, period_ms=1)
    scheduler.start()
    scheduler.join(timeout=2)

    errors = [u for u in updates if u.get("event") == "error"]
    assert len(errors) == 1
    assert errors[0]["error"] == "NonFiniteCostError"
    assert sim.iteration == 0
    assert not sim.running


def test_named_rng_stream_seed_is_stable() -> None:
    rng_a = DeterministicRNG(42)
    rng_b = DeterministicRNG(42)

    vals_a = [rng_a.stream("simulation").random() for _ in range(4)]
    vals_b = [rng_b.stream("simulation").random() for _ in range(4)]
    assert vals_a == vals_b
    assert vals_a != [rng_a.stream("other").random() for _ in range(4)]


def test_rng_stream_is_shared_by_name() -> None:
    rng = DeterministicRNG(7)
    stream = rng.stream("simulation")
    stream.random()
    expected = [DeterministicRNG(7).stream("simulation").random() for _ in range(4)][1:]

    assert rng.stream("simulation") is stream
    assert [rng.stream("simulation").random() for _ in range(3)] == expected


def test_unseeded_rng_draws_a_seed() -> None:
    assert isinstance(DeterministicRNG().seed, int)
