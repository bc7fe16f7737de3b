"""WorldLoop — headless driver around the Simulator.

Runs ticks back to back (no wall-clock pacing), forwards per-tick events
to an optional EventLog and logs progress.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hexarena.core.snapshot import Snapshot

if TYPE_CHECKING:
    from hexarena.config import SimulationConfig
    from hexarena.engine.simulator import Simulator
    from hexarena.utils.event_log import EventLog

logger = logging.getLogger(__name__)


class WorldLoop:
    """The heartbeat of a headless run."""

    __slots__ = ("_config", "_sim", "_event_log")

    def __init__(
        self,
        config: SimulationConfig,
        simulator: Simulator,
        event_log: EventLog | None = None,
    ) -> None:
        self._config = config
        self._sim = simulator
        self._event_log = event_log
        if not simulator.initialized:
            simulator.initialize()
            self._publish()

    @property
    def simulator(self) -> Simulator:
        return self._sim

    def finished(self) -> bool:
        """True once at most one combatant is left alive."""
        return self._sim.world.alive_count() <= 1

    def tick_once(self) -> bool:
        """Execute a single tick. Returns False if the run should stop."""
        step = self._sim.step_index

        if step > self._config.max_ticks:
            logger.info("Tick %d: Max ticks reached.", step)
            return False

        if self.finished():
            logger.info("Tick %d: At most one combatant alive — simulation ended.", step)
            return False

        self._sim.next_step()
        self._publish()
        return True

    def create_snapshot(self) -> Snapshot:
        """Create an immutable snapshot of the current world state."""
        return self._sim.create_snapshot()

    def run(self) -> None:
        """Execute the simulation until max_ticks or the fight is decided."""
        logger.info("=== Simulation started (seed=%d) ===", self._sim.world.seed)

        while self.tick_once():
            step = self._sim.step_index
            if step % self._config.log_every == 0:
                logger.info("Tick %d: %d entities alive", step, self._sim.world.alive_count())

        logger.info("=== Simulation finished at tick %d ===", self._sim.step_index)

    def _publish(self) -> None:
        if self._event_log is not None and self._sim.tick_events:
            self._event_log.append_many(self._sim.tick_events)
