"""Immutable snapshot of the world state for reader threads."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from hexarena.core.models import Entity, Vector2
from hexarena.core.world_state import WorldState


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view of the world, safe to share across threads.

    Entities are copied and exposed through a MappingProxyType keyed by id;
    ``order`` keeps the store order at capture time.
    """

    step: int
    seed: int
    start_time: float
    step_seconds: float
    width: int
    height: int
    entities: Mapping[int, Entity]
    order: tuple[int, ...]
    occupied: tuple[bool, ...]

    @classmethod
    def from_world(cls, world: WorldState, step_seconds: float = 0.1) -> Snapshot:
        copied = {e.id: e.copy() for e in world.entities}
        return cls(
            step=world.step_index,
            seed=world.seed,
            start_time=world.start_time,
            step_seconds=step_seconds,
            width=world.grid.width,
            height=world.grid.height,
            entities=MappingProxyType(copied),
            order=tuple(e.id for e in world.entities),
            occupied=world.grid.occupancy(),
        )

    @property
    def time(self) -> float:
        return self.start_time + self.step * self.step_seconds

    @property
    def alive_count(self) -> int:
        return sum(1 for e in self.entities.values() if e.alive)

    def ordered_entities(self) -> list[Entity]:
        return [self.entities[eid] for eid in self.order]

    def to_point(self, index: int) -> Vector2:
        return Vector2(index % self.width, index // self.width)
