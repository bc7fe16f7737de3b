"""Tests for EntityStore — stable ids over swap-remove storage."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hexarena.core.entity_store import EntityStore
from hexarena.core.models import Entity


def _entity(eid: int, cell: int = 0, health: int = 3) -> Entity:
    return Entity(
        id=eid, max_health=health, health=health,
        current_cell=cell, next_cell=cell,
        ticks_per_move=7, ticks_per_attack=20,
    )


def _store(n: int) -> EntityStore:
    store = EntityStore()
    for i in range(n):
        store.insert(_entity(i, cell=i))
    return store


class TestInsertAndLookup:
    def test_insert_returns_dense_index(self):
        store = EntityStore()
        assert store.insert(_entity(10)) == 0
        assert store.insert(_entity(11)) == 1
        assert len(store) == 2

    def test_get_by_id(self):
        store = _store(3)
        assert store.get_by_id(1).current_cell == 1
        assert store.get_by_id(99) is None
        assert 2 in store
        assert 99 not in store

    def test_iteration_in_index_order(self):
        store = _store(4)
        assert store.ids == [0, 1, 2, 3]
        assert [e.id for e in store] == [0, 1, 2, 3]


class TestRemove:
    def test_swap_remove_moves_last_into_hole(self):
        store = _store(4)
        removed = store.remove_by_id(1)
        assert removed.id == 1
        assert store.ids == [0, 3, 2]
        assert store.index_of(3) == 1
        assert store.check_consistency()

    def test_remove_last(self):
        store = _store(3)
        store.remove_by_id(2)
        assert store.ids == [0, 1]
        assert store.check_consistency()

    def test_remove_unknown_is_noop(self):
        store = _store(2)
        assert store.remove_by_id(7) is None
        assert len(store) == 2

    def test_remove_only_element(self):
        store = _store(1)
        store.remove_by_id(0)
        assert len(store) == 0
        assert store.check_consistency()


class TestCompact:
    def test_compact_drops_matching(self):
        store = _store(6)
        removed = store.compact(lambda e: e.id % 2 == 0)
        assert sorted(e.id for e in removed) == [0, 2, 4]
        assert sorted(store.ids) == [1, 3, 5]
        assert store.check_consistency()

    def test_compact_retests_swapped_record(self):
        """The record swapped into a freed slot must also be checked."""
        store = _store(4)
        removed = store.compact(lambda e: e.id in (0, 3))
        assert sorted(e.id for e in removed) == [0, 3]
        assert sorted(store.ids) == [1, 2]
        assert store.check_consistency()

    def test_compact_everything(self):
        store = _store(5)
        removed = store.compact(lambda e: True)
        assert len(removed) == 5
        assert len(store) == 0
        assert store.check_consistency()

    def test_compact_nothing(self):
        store = _store(3)
        assert store.compact(lambda e: False) == []
        assert store.ids == [0, 1, 2]

    def test_lookups_after_compact(self):
        store = _store(5)
        store.compact(lambda e: e.id == 1)
        for eid in (0, 2, 3, 4):
            assert store.get_by_id(eid).id == eid
        assert store.get_by_id(1) is None


class TestConsistency:
    def test_detects_desync(self):
        store = _store(3)
        store._id_to_index[0] = 2
        assert not store.check_consistency()
