"""Uniform-cost shortest paths over the occupancy grid.

Provides a `Pathfinder` that answers "which cell do I step into next?"
for an entity heading to a destination, routing around occupied cells.

Usage:
    pf = Pathfinder(grid)
    step = pf.shortest_path(from_cell, to_cell)   # cell index or NONE
    path = pf.find_path(from_cell, to_cell)       # list[int] or None
"""

from __future__ import annotations

import heapq
from typing import TYPE_CHECKING

from hexarena.core.enums import NONE
from hexarena.core.hexmath import NEIGHBOR_OFFSETS

if TYPE_CHECKING:
    from hexarena.core.grid import HexGrid

_INF = 1 << 62


class Pathfinder:
    """Dijkstra with unit edge costs on the hex graph.

    Cells are expanded in (distance, index) order, so equal-length routes
    are resolved toward lower cell indices. A cell is traversable when it
    is in bounds and either free or the destination itself: entities path
    onto the cell their target stands on.

    Scratch buffers are kept between calls and reset lazily, touching only
    the cells the previous search reached. Not re-entrant.
    """

    __slots__ = ("_grid", "_dist", "_visited", "_prev", "_frontier", "_origin")

    def __init__(self, grid: HexGrid) -> None:
        self._grid = grid
        cells = grid.cell_count
        self._dist: list[int] = [_INF] * cells
        self._visited: list[bool] = [False] * cells
        self._prev: dict[int, int] = {}
        self._frontier: list[tuple[int, int]] = []
        self._origin: int = NONE

    def shortest_path(self, from_cell: int, to_cell: int) -> int:
        """First cell of a shortest unobstructed path, or NONE if unreachable."""
        if from_cell == to_cell or not self._search(from_cell, to_cell):
            return NONE
        prev = self._prev
        current = to_cell
        while prev[current] != from_cell:
            current = prev[current]
        return current

    def find_path(self, from_cell: int, to_cell: int) -> list[int] | None:
        """Full path excluding *from_cell*, including *to_cell*; None if unreachable."""
        if from_cell == to_cell:
            return []
        if not self._search(from_cell, to_cell):
            return None
        path: list[int] = []
        current = to_cell
        while current != from_cell:
            path.append(current)
            current = self._prev[current]
        path.reverse()
        return path

    # -- internals --

    def _reset(self) -> None:
        dist = self._dist
        visited = self._visited
        if self._origin != NONE:
            dist[self._origin] = _INF
            visited[self._origin] = False
        for cell in self._prev:
            dist[cell] = _INF
            visited[cell] = False
        self._prev.clear()
        self._frontier.clear()

    def _search(self, from_cell: int, to_cell: int) -> bool:
        """Run the expansion; True when *to_cell* was reached."""
        self._reset()
        grid = self._grid
        width, height = grid.width, grid.height
        dist = self._dist
        visited = self._visited
        prev = self._prev
        frontier = self._frontier

        self._origin = from_cell
        dist[from_cell] = 0
        heapq.heappush(frontier, (0, from_cell))

        while frontier:
            d, u = heapq.heappop(frontier)
            if visited[u] or d > dist[u]:
                continue
            visited[u] = True
            if u == to_cell:
                return True

            ux, uy = u % width, u // width
            alt = d + 1
            for offset in NEIGHBOR_OFFSETS[ux & 1]:
                vx, vy = ux + offset.x, uy + offset.y
                if not (0 <= vx < width and 0 <= vy < height):
                    continue
                v = vx + vy * width
                if visited[v]:
                    continue
                if v != to_cell and grid.is_occupied(v):
                    continue
                if alt < dist[v]:
                    dist[v] = alt
                    prev[v] = u
                    heapq.heappush(frontier, (alt, v))

        return False
