"""Perception system — greedy nearest-target selection.

All methods are stateless. There are no factions: every other alive
entity is a potential target.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from hexarena.core.hexmath import distance

if TYPE_CHECKING:
    from hexarena.core.grid import HexGrid
    from hexarena.core.models import Entity


class Perception:
    """Stateless target search utilities."""

    __slots__ = ()

    @staticmethod
    def nearest_target(
        actor: Entity,
        candidates: Iterable[Entity],
        grid: HexGrid,
    ) -> tuple[Entity | None, int]:
        """Return the closest alive entity other than *actor* and its distance.

        Candidates are scanned in order; on equal distance the first one
        seen wins. The scan stops early at distance 1 since nothing alive
        can be closer. Returns ``(None, -1)`` when there is no candidate.
        """
        origin = grid.to_point(actor.current_cell)
        best: Entity | None = None
        best_dist = -1
        for other in candidates:
            if other is actor or not other.alive:
                continue
            d = distance(origin, grid.to_point(other.current_cell))
            if best is None or d < best_dist:
                best = other
                best_dist = d
                if d == 1:
                    break
        return best, best_dist

    @staticmethod
    def in_attack_range(actor: Entity, target: Entity, grid: HexGrid, attack_distance: int) -> bool:
        return distance(grid.to_point(actor.current_cell), grid.to_point(target.current_cell)) <= attack_distance
