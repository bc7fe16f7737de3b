"""Fingerprints of the simulation state for determinism checks."""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

import xxhash

if TYPE_CHECKING:
    from hexarena.core.world_state import WorldState

_RECORD = struct.Struct("<11q")


def world_hash(world: WorldState) -> str:
    """Hex digest over step, RNG position, occupancy and every entity record.

    Wall-clock start time is left out so that two runs started at different
    moments still compare equal.
    """
    h = xxhash.xxh64()
    h.update(struct.pack("<qqqq", world.seed, world.step_index, world.next_entity_id, world.rng.draws))
    h.update(bytes(world.grid.occupancy()))
    for e in world.entities:
        h.update(_RECORD.pack(
            e.id, e.max_health, e.health, e.current_cell, e.next_cell,
            e.ticks_per_move, e.started_move_at, e.ticks_per_attack,
            e.started_attack_at, e.target, e.destroy_at,
        ))
    return h.hexdigest()
