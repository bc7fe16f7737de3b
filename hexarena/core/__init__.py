"""Core data models and world representation."""

from hexarena.core.enums import NONE, EntityState
from hexarena.core.models import CubeCoords, Entity, Vector2
from hexarena.core.grid import HexGrid
from hexarena.core.entity_store import EntityStore
from hexarena.core.world_state import WorldState
from hexarena.core.snapshot import Snapshot

__all__ = [
    "NONE",
    "CubeCoords",
    "Entity",
    "EntityState",
    "EntityStore",
    "HexGrid",
    "Snapshot",
    "Vector2",
    "WorldState",
]
