"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for the simulation run."""

    # World
    seed: int = 42
    map_width: int = 10
    map_height: int = 10
    entity_count: int = 10

    # Timing
    time_step_ms: int = 100
    max_ticks: int = 2000                   # headless driver limit

    # Combat
    attack_distance: int = 1
    destroy_delay: int = 10                 # steps a corpse lingers before removal

    # Spawn sampling (inclusive ranges)
    max_health_range: tuple[int, int] = (2, 5)
    ticks_per_move_range: tuple[int, int] = (7, 20)
    ticks_per_attack_range: tuple[int, int] = (20, 30)

    # Rendering
    hex_radius: float = 1.0                 # world units from hex center to corner

    # Logging
    log_level: str = "INFO"
    log_every: int = 50                     # progress log cadence in ticks

    @property
    def cell_count(self) -> int:
        return self.map_width * self.map_height

    @property
    def step_seconds(self) -> float:
        return self.time_step_ms / 1000.0

    def clamped(self) -> SimulationConfig:
        """Copy with map dimensions raised to 1 and entity count to 0."""
        return replace(
            self,
            map_width=max(self.map_width, 1),
            map_height=max(self.map_height, 1),
            entity_count=max(0, self.entity_count),
        )
