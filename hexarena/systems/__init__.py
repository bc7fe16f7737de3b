"""Engine systems: RNG, entity spawning, state fingerprints."""

from hexarena.systems.rng import DeterministicRNG, RandomStream
from hexarena.systems.spawner import EntitySpawner
from hexarena.systems.state_hash import world_hash

__all__ = ["DeterministicRNG", "EntitySpawner", "RandomStream", "world_hash"]
