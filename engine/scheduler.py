"""Background tick scheduling for a simulator."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from engine.simulator import Simulator


LOGGER = logging.getLogger(__name__)

DEFAULT_PERIOD_MS = 50.0
MIN_PERIOD_MS = 1.0

SchedulerCallback = Callable[[dict[str, Any]], None]


class TickScheduler:
    """Fires simulator ticks from a background thread at an adjustable period.

    The scheduler decides *when* ticks fire; the simulator decides what each
    tick computes. Only one tick runs at a time. Pausing cancels future ticks
    but lets an in-flight tick finish and publish its snapshot. Subscribers
    receive payloads through ``on_update`` and should not touch simulator
    internals directly.
    """

    def __init__(
        self,
        simulator: Simulator,
        on_update: SchedulerCallback | None = None,
        on_complete: SchedulerCallback | None = None,
        period_ms: float = DEFAULT_PERIOD_MS,
    ) -> None:
        self.simulator = simulator
        self.on_update = on_update
        self.on_complete = on_complete
        self._period_ms = max(MIN_PERIOD_MS, float(period_ms))
        self._thread: threading.Thread | None = None
        self._wake_event = threading.Event()
        self._halt_event = threading.Event()

    @property
    def period_ms(self) -> float:
        return self._period_ms

    def set_period(self, period_ms: float) -> None:
        """Adjust the tick period; takes effect without restarting the loop."""
        self._period_ms = max(MIN_PERIOD_MS, float(period_ms))
        self._wake_event.set()

    def is_alive(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def start(self) -> None:
        """Start the simulator and its tick thread; no-op when already ticking."""
        if self.is_alive():
            if not self._halt_event.is_set():
                return
            self.join()
        self.simulator.start()
        self._halt_event.clear()
        self._wake_event.clear()
        self._thread = threading.Thread(target=self._run, name="tick-scheduler", daemon=True)
        self._thread.start()

    def pause(self) -> None:
        """Cancel future ticks; simulator state is preserved."""
        self._halt_event.set()
        self._wake_event.set()
        self.simulator.pause()

    def stop(self) -> None:
        """Cancel future ticks and wait for the tick thread to exit."""
        self.pause()
        self.join()

    def join(self, timeout: float | None = None) -> None:
        """Join worker thread for deterministic tests/shutdown."""
        thread = self._thread
        if thread and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=timeout)

    def _run(self) -> None:
        while not self._halt_event.is_set():
            try:
                ticked = self.simulator.tick()
            except Exception as exc:
                LOGGER.exception("Tick failed at iteration %d", self.simulator.iteration)
                self._safe_emit(
                    {
                        "event": "error",
                        "iteration": self.simulator.iteration,
                        "error": type(exc).__name__,
                        "message": str(exc),
                    }
                )
                break

            if not ticked:
                break

            self._safe_emit({"event": "tick", "snapshot": self.simulator.snapshot()})

            self._wake_event.wait(timeout=self._period_ms / 1000.0)
            self._wake_event.clear()

        completion = {
            "event": "complete",
            "paused": self._halt_event.is_set(),
            "iteration": self.simulator.iteration,
            "snapshot": self.simulator.snapshot(),
        }
        if self.on_complete is not None:
            try:
                self.on_complete(completion)
            except Exception:
                LOGGER.exception("on_complete callback failed")
        else:
            self._safe_emit(completion)

    def _safe_emit(self, payload: dict[str, Any]) -> None:
        if self.on_update is None:
            return
        try:
            self.on_update(payload)
        except Exception:
            LOGGER.exception("on_update callback failed for %s event", payload.get("event"))
