"""Core data models: Vector2, CubeCoords, Entity."""

from __future__ import annotations

from dataclasses import dataclass

from hexarena.core.enums import NONE, EntityState


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable odd-q offset coordinate (column, row)."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True, slots=True)
class CubeCoords:
    """Cube hex coordinate; q + r + s == 0 always holds."""

    q: int = 0
    r: int = 0
    s: int = 0

    def __sub__(self, other: CubeCoords) -> CubeCoords:
        return CubeCoords(self.q - other.q, self.r - other.r, self.s - other.s)


@dataclass(slots=True)
class Entity:
    """A combatant on the hex map.

    Cross-entity references (``target``) are stable ids, never list
    indices: indices change whenever the store swap-removes a corpse.
    """

    id: int
    max_health: int
    health: int
    current_cell: int
    next_cell: int
    ticks_per_move: int
    ticks_per_attack: int
    started_move_at: int = 0
    started_attack_at: int = NONE
    target: int = NONE
    destroy_at: int = NONE

    @property
    def alive(self) -> bool:
        return self.health > 0

    @property
    def dying(self) -> bool:
        return self.health <= 0

    @property
    def moving(self) -> bool:
        return self.current_cell != self.next_cell

    @property
    def engaged(self) -> bool:
        return self.target != NONE

    def state(self) -> EntityState:
        """Derive the renderer-facing state from the raw fields."""
        if self.dying:
            return EntityState.DYING
        if self.engaged:
            return EntityState.ENGAGED
        if self.moving:
            return EntityState.MOVING
        return EntityState.IDLE

    def move_progress(self, step: int) -> float:
        """Fraction in [0, 1] of the current hex traversal completed at *step*."""
        if not self.moving or self.ticks_per_move <= 0:
            return 0.0
        elapsed = step - self.started_move_at
        return max(0.0, min(1.0, elapsed / self.ticks_per_move))

    def copy(self) -> Entity:
        return Entity(
            id=self.id,
            max_health=self.max_health,
            health=self.health,
            current_cell=self.current_cell,
            next_cell=self.next_cell,
            ticks_per_move=self.ticks_per_move,
            ticks_per_attack=self.ticks_per_attack,
            started_move_at=self.started_move_at,
            started_attack_at=self.started_attack_at,
            target=self.target,
            destroy_at=self.destroy_at,
        )

    def __repr__(self) -> str:
        return (
            f"Entity(id={self.id}, hp={self.health}/{self.max_health}, "
            f"cell={self.current_cell}->{self.next_cell}, target={self.target})"
        )
