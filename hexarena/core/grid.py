"""Hex map with per-cell occupancy."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hexarena.core.hexmath import DIRECTION_COUNT, neighbor
from hexarena.core.models import Vector2

if TYPE_CHECKING:
    from hexarena.systems.rng import RandomStream


class HexGrid:
    """Rectangular odd-q hex map backed by a flat occupancy list.

    A cell is occupied when an alive entity stands on it or has reserved
    it as the destination of an in-flight move. One flag per cell is
    enough: the step engine never lets two entities claim the same cell.
    """

    __slots__ = ("width", "height", "_occupied")

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._occupied: list[bool] = [False] * (width * height)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    # -- addressing --

    def to_index(self, p: Vector2) -> int:
        """Flat index of *p*. No bounds check; the caller guarantees validity."""
        return p.x + p.y * self.width

    def to_point(self, index: int) -> Vector2:
        return Vector2(index % self.width, index // self.width)

    def is_valid(self, p: Vector2) -> bool:
        return 0 <= p.x < self.width and 0 <= p.y < self.height

    # -- occupancy --

    def is_occupied(self, cell: int | Vector2) -> bool:
        if isinstance(cell, Vector2):
            cell = self.to_index(cell)
        return self._occupied[cell]

    def set_occupied(self, index: int, occupied: bool = True) -> None:
        self._occupied[index] = occupied

    def clear(self) -> None:
        self._occupied = [False] * self.cell_count

    def occupied_count(self) -> int:
        return sum(self._occupied)

    def occupancy(self) -> tuple[bool, ...]:
        """Immutable copy of the occupancy flags in index order."""
        return tuple(self._occupied)

    # -- random placement --

    def random_free_cell(self, rng: RandomStream) -> int:
        """Random cell, probing forward (wrapping) until a free one is found.

        At least one free cell must exist.
        """
        count = self.cell_count
        index = rng.rand_range(0, count - 1)
        while self._occupied[index]:
            index = (index + 1) % count
        return index

    def random_free_neighbor(self, origin: Vector2, rng: RandomStream) -> int | None:
        """Index of a free in-bounds neighbor of *origin*, or None.

        The scan starts at a random direction and rotates through all six.
        """
        start = rng.rand_helper(DIRECTION_COUNT)
        for offset in range(DIRECTION_COUNT):
            p = neighbor(origin, (start + offset) % DIRECTION_COUNT)
            if self.is_valid(p) and not self._occupied[self.to_index(p)]:
                return self.to_index(p)
        return None

    # -- copy --

    def copy(self) -> HexGrid:
        new = HexGrid.__new__(HexGrid)
        new.width = self.width
        new.height = self.height
        new._occupied = list(self._occupied)
        return new
