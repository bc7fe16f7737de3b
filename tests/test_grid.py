"""Tests for HexGrid addressing, occupancy and random placement."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hexarena.core.grid import HexGrid
from hexarena.core.hexmath import neighbors
from hexarena.core.models import Vector2
from hexarena.systems.rng import RandomStream


class TestAddressing:
    def test_point_index_round_trip(self):
        g = HexGrid(7, 4)
        for x in range(7):
            for y in range(4):
                p = Vector2(x, y)
                assert g.to_point(g.to_index(p)) == p

    def test_index_point_round_trip(self):
        g = HexGrid(7, 4)
        for i in range(g.cell_count):
            assert g.to_index(g.to_point(i)) == i

    def test_index_layout(self):
        g = HexGrid(5, 3)
        assert g.to_index(Vector2(0, 0)) == 0
        assert g.to_index(Vector2(4, 0)) == 4
        assert g.to_index(Vector2(0, 1)) == 5
        assert g.to_point(13) == Vector2(3, 2)

    def test_is_valid(self):
        g = HexGrid(3, 2)
        assert g.is_valid(Vector2(0, 0))
        assert g.is_valid(Vector2(2, 1))
        assert not g.is_valid(Vector2(3, 0))
        assert not g.is_valid(Vector2(0, 2))
        assert not g.is_valid(Vector2(-1, 0))


class TestOccupancy:
    def test_starts_empty(self):
        g = HexGrid(4, 4)
        assert g.occupied_count() == 0

    def test_set_and_query_by_index_or_point(self):
        g = HexGrid(4, 4)
        g.set_occupied(g.to_index(Vector2(2, 3)))
        assert g.is_occupied(Vector2(2, 3))
        assert g.is_occupied(14)
        g.set_occupied(14, False)
        assert not g.is_occupied(Vector2(2, 3))

    def test_clear(self):
        g = HexGrid(2, 2)
        for i in range(4):
            g.set_occupied(i)
        g.clear()
        assert g.occupied_count() == 0

    def test_copy_is_independent(self):
        g = HexGrid(3, 3)
        g.set_occupied(4)
        c = g.copy()
        c.set_occupied(4, False)
        assert g.is_occupied(4)
        assert not c.is_occupied(4)


class TestRandomPlacement:
    def test_free_cell_on_single_cell_map(self):
        g = HexGrid(1, 1)
        assert g.random_free_cell(RandomStream(0)) == 0

    def test_free_cell_skips_occupied(self):
        g = HexGrid(4, 4)
        for i in range(g.cell_count):
            if i != 9:
                g.set_occupied(i)
        assert g.random_free_cell(RandomStream(123)) == 9

    def test_free_cells_never_collide(self):
        g = HexGrid(5, 5)
        rng = RandomStream(7)
        picked = []
        for _ in range(g.cell_count):
            cell = g.random_free_cell(rng)
            assert not g.is_occupied(cell)
            g.set_occupied(cell)
            picked.append(cell)
        assert sorted(picked) == list(range(25))

    def test_free_neighbor_none_when_surrounded(self):
        g = HexGrid(5, 5)
        center = Vector2(2, 2)
        for n in neighbors(center):
            g.set_occupied(g.to_index(n))
        assert g.random_free_neighbor(center, RandomStream(1)) is None

    def test_free_neighbor_finds_last_free_slot(self):
        """Whatever the random start direction, all six are scanned."""
        g = HexGrid(5, 5)
        center = Vector2(2, 2)
        ring = neighbors(center)
        for n in ring[:-1]:
            g.set_occupied(g.to_index(n))
        expected = g.to_index(ring[-1])
        for seed in range(20):
            assert g.random_free_neighbor(center, RandomStream(seed)) == expected

    def test_free_neighbor_respects_bounds(self):
        g = HexGrid(2, 2)
        for seed in range(20):
            cell = g.random_free_neighbor(Vector2(0, 0), RandomStream(seed))
            assert cell is not None
            assert g.to_point(cell) in (Vector2(1, 0), Vector2(0, 1))

    def test_free_neighbor_on_single_cell_map(self):
        g = HexGrid(1, 1)
        assert g.random_free_neighbor(Vector2(0, 0), RandomStream(0)) is None
