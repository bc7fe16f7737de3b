"""Entity spawner — samples combatants and places them on free cells."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hexarena.core.models import Entity

if TYPE_CHECKING:
    from hexarena.config import SimulationConfig
    from hexarena.core.world_state import WorldState

logger = logging.getLogger(__name__)


class EntitySpawner:
    """Creates entities with deterministic random stats at random free cells.

    Draw order per entity is fixed (cell, max health, ticks per move,
    ticks per attack) and is part of the determinism contract.
    """

    __slots__ = ("_config",)

    def __init__(self, config: SimulationConfig) -> None:
        self._config = config

    def spawn(self, world: WorldState) -> Entity:
        """Create one entity, add it to *world* and claim its cell."""
        cfg = self._config
        rng = world.rng
        eid = world.allocate_entity_id()
        cell = world.grid.random_free_cell(rng)
        max_health = rng.rand_range(*cfg.max_health_range)
        entity = Entity(
            id=eid,
            max_health=max_health,
            health=max_health,
            current_cell=cell,
            next_cell=cell,
            ticks_per_move=rng.rand_range(*cfg.ticks_per_move_range),
            ticks_per_attack=rng.rand_range(*cfg.ticks_per_attack_range),
        )
        world.add_entity(entity)
        logger.debug("Spawned entity %d at %s (hp=%d)", eid, world.grid.to_point(cell), max_health)
        return entity

    def spawn_many(self, world: WorldState, count: int) -> list[Entity]:
        """Spawn up to *count* entities, stopping early when the map is full."""
        spawned: list[Entity] = []
        for _ in range(count):
            if world.grid.occupied_count() >= world.grid.cell_count:
                logger.warning(
                    "Map full after %d of %d entities, remaining spawns skipped",
                    len(spawned), count,
                )
                break
            spawned.append(self.spawn(world))
        return spawned
