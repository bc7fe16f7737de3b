"""Simulator — the deterministic per-tick step engine.

One call to ``next_step`` is one tick. Entities are processed in store
order and each runs a small state machine:

  A. Decay: corpses get a removal deadline and may request a sweep
  B. Engagement: strike a live adjacent target on cadence
  C. Movement: finish an in-flight move, or look for the nearest target
     and either engage it or reserve the next cell toward it
  D. Sweep: after the pass, drop corpses and release their cells

Earlier entities' moves and reservations are visible to later ones in the
same tick, which gives a fixed first-mover priority on conflicts.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from hexarena.ai.pathfinding import Pathfinder
from hexarena.ai.perception import Perception
from hexarena.config import SimulationConfig
from hexarena.core.enums import NONE
from hexarena.core.grid import HexGrid
from hexarena.core.models import Entity, Vector2
from hexarena.core.snapshot import Snapshot
from hexarena.core.world_state import WorldState
from hexarena.systems.spawner import EntitySpawner
from hexarena.systems.state_hash import world_hash
from hexarena.utils.event_log import SimEvent

logger = logging.getLogger(__name__)


class Simulator:
    """Owns the world, the pathfinder scratch and the tick counter.

    Single-threaded and synchronous: neither ``initialize`` nor
    ``next_step`` yields or blocks, and all effects of tick *n* are in
    place before tick *n + 1* starts.
    """

    __slots__ = (
        "_config",
        "_clock",
        "_pathfinder_factory",
        "_world",
        "_pathfinder",
        "_spawner",
        "_tick_events",
    )

    def __init__(
        self,
        config: SimulationConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
        pathfinder_factory: Callable[[HexGrid], Pathfinder] = Pathfinder,
    ) -> None:
        self._config = config or SimulationConfig()
        self._clock = clock
        self._pathfinder_factory = pathfinder_factory
        self._world: WorldState | None = None
        self._pathfinder: Pathfinder | None = None
        self._spawner: EntitySpawner | None = None
        self._tick_events: list[SimEvent] = []

    # -- public properties --

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def initialized(self) -> bool:
        return self._world is not None

    @property
    def world(self) -> WorldState:
        return self._require_world()

    @property
    def grid(self) -> HexGrid:
        return self._require_world().grid

    @property
    def step_index(self) -> int:
        return self._world.step_index if self._world is not None else 0

    @property
    def entities(self) -> tuple[Entity, ...]:
        """Entities in store order. Treat as read-only."""
        if self._world is None:
            return ()
        return self._world.entities.as_tuple()

    @property
    def pathfinder(self) -> Pathfinder:
        self._require_world()
        return self._pathfinder

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted during the most recent call to ``next_step``."""
        return self._tick_events

    # -- control --

    def initialize(self) -> None:
        """Seed the RNG, build an empty map and spawn the configured entities."""
        cfg = self._config.clamped()
        self._config = cfg

        grid = HexGrid(cfg.map_width, cfg.map_height)
        world = WorldState(seed=cfg.seed, grid=grid)
        self._world = world
        self._pathfinder = self._pathfinder_factory(grid)
        self._spawner = EntitySpawner(cfg)
        self._tick_events = []

        for entity in self._spawner.spawn_many(world, cfg.entity_count):
            self._emit("spawn", f"Entity {entity.id} spawned at {grid.to_point(entity.current_cell)}", (entity.id,))

        world.step_index = 1
        world.start_time = self._clock()
        logger.info(
            "Simulator initialized: seed=%d map=%dx%d entities=%d",
            cfg.seed, cfg.map_width, cfg.map_height, len(world.entities),
        )

    def next_step(self) -> None:
        """Advance the simulation by exactly one tick."""
        world = self._require_world()
        step = world.step_index
        entities = world.entities
        self._tick_events = []
        sweep_needed = False

        # No removals happen during the pass, so indices stay valid.
        for i in range(len(entities)):
            entity = entities[i]
            if entity.dying:
                if self._decay(entity, step):
                    sweep_needed = True
                continue

            if entity.target != NONE and self._engage(entity, step):
                continue

            self._advance(entity, step)

        if sweep_needed:
            self._sweep(step)

        world.step_index += 1

    def time_at_step(self, step: int) -> float:
        """Simulated time in seconds at which *step* begins."""
        start = self._world.start_time if self._world is not None else 0.0
        return start + step * self._config.step_seconds

    # -- queries --

    def get_entity_info(self, entity_id: int) -> Entity | None:
        """Copy of the entity record for *entity_id*, or None if it is gone."""
        if self._world is None:
            return None
        entity = self._world.entities.get_by_id(entity_id)
        return entity.copy() if entity is not None else None

    def to_point(self, cell_index: int) -> Vector2:
        return self._require_world().grid.to_point(cell_index)

    def to_index(self, p: Vector2) -> int:
        return self._require_world().grid.to_index(p)

    def create_snapshot(self) -> Snapshot:
        return Snapshot.from_world(self._require_world(), self._config.step_seconds)

    def state_hash(self) -> str:
        return world_hash(self._require_world())

    # -- per-entity phases --

    def _decay(self, entity: Entity, step: int) -> bool:
        """Handle a corpse. True when a removal sweep should run this tick."""
        if entity.destroy_at == NONE:
            entity.destroy_at = step + self._config.destroy_delay
            self._emit("death", f"Entity {entity.id} died", (entity.id,))
            logger.info("Tick %d: Entity %d died (removal at %d)", step, entity.id, entity.destroy_at)
            return False
        return entity.destroy_at >= step

    def _engage(self, entity: Entity, step: int) -> bool:
        """Keep fighting the current target. False if the target was dropped."""
        world = self._world
        target = world.entities.get_by_id(entity.target)
        if (
            target is not None
            and target.alive
            and Perception.in_attack_range(entity, target, world.grid, self._config.attack_distance)
        ):
            if step - entity.started_attack_at >= entity.ticks_per_attack:
                target.health -= 1
                entity.started_attack_at = step
                self._emit(
                    "attack",
                    f"Entity {entity.id} hit Entity {target.id} ({target.health}/{target.max_health})",
                    (entity.id, target.id),
                )
                logger.debug("Tick %d: Entity %d hit Entity %d, hp=%d", step, entity.id, target.id, target.health)
            return True

        logger.debug("Tick %d: Entity %d lost target %d", step, entity.id, entity.target)
        entity.target = NONE
        return False

    def _advance(self, entity: Entity, step: int) -> None:
        """Finish an in-flight move, or pick a target and plan the next step."""
        if entity.moving and step - entity.started_move_at < entity.ticks_per_move:
            return

        grid = self._world.grid
        if entity.moving:
            grid.set_occupied(entity.current_cell, False)
            grid.set_occupied(entity.next_cell, True)
            entity.current_cell = entity.next_cell
            entity.started_move_at = step
            self._emit("move", f"Entity {entity.id} arrived at {grid.to_point(entity.current_cell)}", (entity.id,))
            # No target search on the tick of arrival.
            return

        entity.started_move_at = step
        self._acquire(entity, step)

    def _acquire(self, entity: Entity, step: int) -> None:
        world = self._world
        grid = world.grid
        target, dist = Perception.nearest_target(entity, world.entities, grid)
        if target is None:
            return

        if dist <= self._config.attack_distance:
            entity.next_cell = entity.current_cell
            entity.target = target.id
            entity.started_attack_at = step
            self._emit("engage", f"Entity {entity.id} engaged Entity {target.id}", (entity.id, target.id))
            logger.debug("Tick %d: Entity %d engaged Entity %d", step, entity.id, target.id)
            return

        entity.started_attack_at = NONE
        entity.target = NONE
        next_cell = self._pathfinder.shortest_path(entity.current_cell, target.current_cell)
        if next_cell == NONE:
            entity.next_cell = entity.current_cell
            logger.debug("Tick %d: Entity %d has no path to Entity %d", step, entity.id, target.id)
            return

        entity.next_cell = next_cell
        grid.set_occupied(next_cell, True)
        logger.debug(
            "Tick %d: Entity %d heading %s -> %s toward Entity %d",
            step, entity.id, grid.to_point(entity.current_cell), grid.to_point(next_cell), target.id,
        )

    def _sweep(self, step: int) -> None:
        """Remove corpses and release the cells they held."""
        world = self._world
        grid = world.grid

        # Deadline at or after the current step: a corpse goes on the first
        # sweep after it is marked, not when the deadline passes.
        removed = world.entities.compact(lambda e: e.destroy_at >= step)
        for corpse in removed:
            grid.set_occupied(corpse.current_cell, False)
            grid.set_occupied(corpse.next_cell, False)
            self._emit("despawn", f"Entity {corpse.id} removed", (corpse.id,))
        if removed:
            logger.info(
                "Tick %d: Removed %d corpse(s), %d entities remain",
                step, len(removed), len(world.entities),
            )

    # -- helpers --

    def _emit(self, category: str, message: str, entity_ids: tuple[int, ...] = ()) -> None:
        tick = self._world.step_index if self._world is not None else 0
        self._tick_events.append(SimEvent(tick=tick, category=category, message=message, entity_ids=entity_ids))

    def _require_world(self) -> WorldState:
        if self._world is None:
            raise RuntimeError("Simulator not initialized — call initialize() first.")
        return self._world
