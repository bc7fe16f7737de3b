"""Tests for odd-q hex geometry: neighbors, cube conversion, distance."""

import sys
import os
import itertools

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from hexarena.core.hexmath import (
    DIRECTION_COUNT,
    cube_to_oddq,
    distance,
    hex_to_world,
    neighbor,
    neighbors,
    oddq_to_cube,
)
from hexarena.core.models import CubeCoords, Vector2

_POINTS = [Vector2(x, y) for x in range(6) for y in range(6)]


class TestNeighbors:
    def test_even_column_offsets(self):
        p = Vector2(2, 2)
        got = [neighbor(p, d) for d in range(DIRECTION_COUNT)]
        assert got == [
            Vector2(3, 2), Vector2(3, 1), Vector2(2, 1),
            Vector2(1, 1), Vector2(1, 2), Vector2(2, 3),
        ]

    def test_odd_column_offsets(self):
        p = Vector2(3, 2)
        got = [neighbor(p, d) for d in range(DIRECTION_COUNT)]
        assert got == [
            Vector2(4, 3), Vector2(4, 2), Vector2(3, 1),
            Vector2(2, 2), Vector2(2, 3), Vector2(3, 3),
        ]

    @pytest.mark.parametrize("direction", [-1, 6, 42])
    def test_invalid_direction_returns_zero(self, direction):
        assert neighbor(Vector2(3, 3), direction) == Vector2(0, 0)

    def test_neighbors_matches_neighbor(self):
        for p in _POINTS:
            assert neighbors(p) == [neighbor(p, d) for d in range(DIRECTION_COUNT)]

    def test_adjacency_is_symmetric(self):
        for p in _POINTS:
            for n in neighbors(p):
                assert p in neighbors(n), f"{n} is a neighbor of {p} but not vice versa"

    def test_neighbors_are_at_distance_one(self):
        for p in _POINTS:
            assert all(distance(p, n) == 1 for n in neighbors(p))
            assert len(set(neighbors(p))) == 6


class TestCube:
    def test_cube_components_sum_to_zero(self):
        for p in _POINTS:
            c = oddq_to_cube(p)
            assert c.q + c.r + c.s == 0

    def test_round_trip(self):
        for p in _POINTS + [Vector2(-3, -2), Vector2(-1, 4)]:
            assert cube_to_oddq(oddq_to_cube(p)) == p

    def test_known_values(self):
        assert oddq_to_cube(Vector2(0, 0)) == CubeCoords(0, 0, 0)
        assert oddq_to_cube(Vector2(2, 2)) == CubeCoords(2, 1, -3)
        assert oddq_to_cube(Vector2(3, 0)) == CubeCoords(3, -1, -2)


class TestDistance:
    def test_zero_to_self(self):
        for p in _POINTS:
            assert distance(p, p) == 0

    def test_known_distances(self):
        assert distance(Vector2(0, 0), Vector2(4, 0)) == 4
        assert distance(Vector2(0, 0), Vector2(2, 2)) == 3
        assert distance(Vector2(0, 0), Vector2(0, 5)) == 5

    def test_symmetry(self):
        for a, b in itertools.product(_POINTS, repeat=2):
            assert distance(a, b) == distance(b, a)

    def test_triangle_inequality(self):
        pts = [Vector2(x, y) for x in range(5) for y in range(5)]
        for a, b, c in itertools.product(pts, repeat=3):
            assert distance(a, c) <= distance(a, b) + distance(b, c)


class TestWorldCoords:
    def test_origin(self):
        assert hex_to_world(Vector2(0, 0), 10.0) == (0.0, 0.0)

    def test_odd_column_shifted_half_cell(self):
        x, y = hex_to_world(Vector2(1, 0), 10.0)
        assert x == pytest.approx(15.0)
        assert y == pytest.approx(10.0 * 3 ** 0.5 * 0.5)
