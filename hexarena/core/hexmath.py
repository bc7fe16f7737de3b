"""Hex geometry for the odd-q offset layout.

Odd columns are shifted down by half a cell. All public functions take
offset coordinates; cube coordinates are used internally for distance.
Directions are numbered 0..5 counter-clockwise starting at the lower-right
neighbor of an even column.
"""

from __future__ import annotations

import math

from hexarena.core.models import CubeCoords, Vector2

DIRECTION_COUNT = 6

# Offsets for even columns. (1, 1) and (-1, 1) are not neighbors here.
_EVEN_OFFSETS: tuple[Vector2, ...] = (
    Vector2(1, 0),
    Vector2(1, -1),
    Vector2(0, -1),
    Vector2(-1, -1),
    Vector2(-1, 0),
    Vector2(0, 1),
)

# Offsets for odd columns. (-1, -1) and (1, -1) are not neighbors here.
_ODD_OFFSETS: tuple[Vector2, ...] = (
    Vector2(1, 1),
    Vector2(1, 0),
    Vector2(0, -1),
    Vector2(-1, 0),
    Vector2(-1, 1),
    Vector2(0, 1),
)

NEIGHBOR_OFFSETS: tuple[tuple[Vector2, ...], tuple[Vector2, ...]] = (_EVEN_OFFSETS, _ODD_OFFSETS)

_SQRT3 = math.sqrt(3.0)


def oddq_to_cube(p: Vector2) -> CubeCoords:
    q = p.x
    r = p.y - (p.x - (p.x & 1)) // 2
    return CubeCoords(q, r, -q - r)


def cube_to_oddq(c: CubeCoords) -> Vector2:
    return Vector2(c.q, c.r + (c.q - (c.q & 1)) // 2)


def neighbor(p: Vector2, direction: int) -> Vector2:
    """Return the neighbor of *p* in *direction*.

    An out-of-range direction yields ``Vector2(0, 0)``; callers must still
    check the result against the map bounds.
    """
    if direction < 0 or direction >= DIRECTION_COUNT:
        return Vector2(0, 0)
    return p + NEIGHBOR_OFFSETS[p.x & 1][direction]


def neighbors(p: Vector2) -> list[Vector2]:
    """All six neighbors of *p* in direction order (unbounded)."""
    offsets = NEIGHBOR_OFFSETS[p.x & 1]
    return [Vector2(p.x + o.x, p.y + o.y) for o in offsets]


def distance(a: Vector2, b: Vector2) -> int:
    d = oddq_to_cube(a) - oddq_to_cube(b)
    return max(abs(d.q), abs(d.r), abs(d.s))


def hex_to_world(p: Vector2, radius: float) -> tuple[float, float]:
    """Center of hex *p* in world units for a flat-topped layout."""
    x = radius * 1.5 * p.x
    y = radius * _SQRT3 * (p.y + 0.5 * (p.x & 1))
    return x, y
