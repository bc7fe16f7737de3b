"""Dense entity storage with stable ids and swap-remove."""

from __future__ import annotations

from typing import Callable, Iterator

from hexarena.core.models import Entity


class EntityStore:
    """Dense list of entities plus an ``id -> index`` map.

    Removal swaps the last record into the freed slot, so indices are only
    meaningful until the next removal. Anything held across ticks must be
    an id.
    """

    __slots__ = ("_entities", "_id_to_index")

    def __init__(self) -> None:
        self._entities: list[Entity] = []
        self._id_to_index: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __getitem__(self, index: int) -> Entity:
        return self._entities[index]

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._id_to_index

    @property
    def ids(self) -> list[int]:
        return [e.id for e in self._entities]

    def as_tuple(self) -> tuple[Entity, ...]:
        return tuple(self._entities)

    def clear(self) -> None:
        self._entities.clear()
        self._id_to_index.clear()

    def insert(self, entity: Entity) -> int:
        index = len(self._entities)
        self._entities.append(entity)
        self._id_to_index[entity.id] = index
        return index

    def index_of(self, entity_id: int) -> int | None:
        return self._id_to_index.get(entity_id)

    def get_by_id(self, entity_id: int) -> Entity | None:
        index = self._id_to_index.get(entity_id)
        if index is None:
            return None
        return self._entities[index]

    def remove_by_id(self, entity_id: int) -> Entity | None:
        index = self._id_to_index.pop(entity_id, None)
        if index is None:
            return None
        removed = self._entities[index]
        last = self._entities.pop()
        if last is not removed:
            self._entities[index] = last
            self._id_to_index[last.id] = index
        return removed

    def compact(self, predicate: Callable[[Entity], bool]) -> list[Entity]:
        """Swap-remove every entity matching *predicate* and rebuild the map.

        Returns the removed entities in the order they were dropped.
        """
        removed: list[Entity] = []
        entities = self._entities
        i = 0
        while i < len(entities):
            if predicate(entities[i]):
                removed.append(entities[i])
                last = entities.pop()
                if i < len(entities):
                    entities[i] = last
                # re-test the record swapped into slot i
                continue
            i += 1
        self._rebuild_index()
        return removed

    def _rebuild_index(self) -> None:
        self._id_to_index = {e.id: i for i, e in enumerate(self._entities)}

    def check_consistency(self) -> bool:
        """True when the id map matches the dense list exactly."""
        if len(self._id_to_index) != len(self._entities):
            return False
        return all(
            0 <= index < len(self._entities) and self._entities[index].id == eid
            for eid, index in self._id_to_index.items()
        )
