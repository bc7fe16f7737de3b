"""Mutable authoritative world state — only mutated by the Simulator."""

from __future__ import annotations

from hexarena.core.entity_store import EntityStore
from hexarena.core.grid import HexGrid
from hexarena.core.models import Entity
from hexarena.systems.rng import RandomStream


class WorldState:
    """The single source of truth for the simulation."""

    __slots__ = ("step_index", "start_time", "seed", "grid", "entities", "rng", "_next_entity_id")

    def __init__(self, seed: int, grid: HexGrid, start_time: float = 0.0) -> None:
        self.step_index: int = 0
        self.start_time: float = start_time
        self.seed: int = seed
        self.grid: HexGrid = grid
        self.entities: EntityStore = EntityStore()
        self.rng: RandomStream = RandomStream(seed)
        self._next_entity_id: int = 0

    @property
    def next_entity_id(self) -> int:
        return self._next_entity_id

    def allocate_entity_id(self) -> int:
        eid = self._next_entity_id
        self._next_entity_id += 1
        return eid

    def add_entity(self, entity: Entity) -> None:
        """Store *entity* and claim its cells on the grid."""
        self.entities.insert(entity)
        self.grid.set_occupied(entity.current_cell)
        if entity.next_cell != entity.current_cell:
            self.grid.set_occupied(entity.next_cell)

    def alive_count(self) -> int:
        return sum(1 for e in self.entities if e.alive)
