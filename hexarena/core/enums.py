"""Enumerations and sentinels used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique

# Sentinel for "no cell / no entity / no step" in integer-typed fields.
NONE: int = -1


@unique
class EntityState(IntEnum):
    """Derived per-tick state of an entity, as seen by a renderer."""

    IDLE = 0
    MOVING = 1
    ENGAGED = 2
    DYING = 3
