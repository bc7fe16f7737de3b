"""EngineManager — runs the Simulator on a background thread.

The API reads from an atomically-swapped immutable Snapshot; the
Simulator mutates its world exclusively on the engine thread, so the
single-writer rule of the core is preserved.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from hexarena.core.snapshot import Snapshot
from hexarena.engine.simulator import Simulator
from hexarena.engine.world_loop import WorldLoop
from hexarena.utils.event_log import EventLog

if TYPE_CHECKING:
    from hexarena.config import SimulationConfig

logger = logging.getLogger(__name__)


class EngineManager:
    """Manages the simulation lifecycle on a background thread.

    Provides thread-safe access to:
      - latest snapshot (atomic reference swap)
      - event log (lock-guarded buffer)
      - control commands (start / pause / resume / step / reset)
    """

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config
        self._tick_rate: float = config.step_seconds  # seconds between ticks

        self._sim: Simulator | None = None
        self._loop: WorldLoop | None = None

        self._snapshot_lock = threading.Lock()
        # Held for every tick and rebuild: the simulator has a single writer.
        self._tick_lock = threading.RLock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog()

        self._thread: threading.Thread | None = None
        self._running = threading.Event()
        self._paused = threading.Event()
        self._step_requested = threading.Event()
        self._stop_requested = threading.Event()

        self._build()

    # -- public properties --

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def paused(self) -> bool:
        return self._paused.is_set()

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.01, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def finished(self) -> bool:
        return self._loop.finished() if self._loop else False

    # -- snapshot access --

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- lifecycle --

    def start(self) -> None:
        with self._tick_lock:
            if self._running.is_set():
                return
            self._stop_requested.clear()
            self._paused.clear()
            self._running.set()
            self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
            self._thread.start()
        logger.info("EngineManager started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        self._paused.set()
        logger.info("EngineManager paused at tick %d", self._current_tick())

    def resume(self) -> None:
        self._paused.clear()
        logger.info("EngineManager resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Request exactly one tick (the loop must be paused)."""
        if not self._paused.is_set():
            self.pause()
        self._step_requested.set()

    def step_sync(self) -> int:
        """Execute one tick on the calling thread. Only valid while stopped."""
        with self._tick_lock:
            if self._running.is_set():
                raise RuntimeError("step_sync() requires the engine thread to be stopped.")
            self._tick()
            return self._current_tick()

    def stop(self) -> None:
        self._stop_requested.set()
        self._paused.clear()
        self._running.clear()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("EngineManager stopped.")

    def reset(self) -> None:
        """Stop, rebuild, and leave the engine stopped at step 1."""
        self.stop()
        with self._tick_lock:
            self._event_log.clear()
            self._build()
        logger.info("EngineManager reset.")

    # -- internals --

    def _build(self) -> None:
        self._sim = Simulator(self._config)
        self._loop = WorldLoop(self._config, self._sim, self._event_log)
        self._publish()

    def _publish(self) -> None:
        snap = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

    def _tick(self) -> bool:
        with self._tick_lock:
            advanced = self._loop.tick_once()
            if advanced:
                self._publish()
            return advanced

    def _current_tick(self) -> int:
        snap = self.get_snapshot()
        return snap.step if snap else 0

    def _run_loop(self) -> None:
        while not self._stop_requested.is_set():
            if self._paused.is_set():
                if self._step_requested.wait(timeout=0.05):
                    self._step_requested.clear()
                    self._tick()
                continue

            if not self._tick():
                logger.info("Engine loop idle: run finished at tick %d", self._current_tick())
                self._paused.set()
                continue

            self._stop_requested.wait(timeout=self._tick_rate)
