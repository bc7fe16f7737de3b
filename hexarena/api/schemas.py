"""Pydantic response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Entity ---

class EntitySchema(BaseModel):
    id: int
    x: int
    y: int
    next_x: int
    next_y: int
    world_x: float = Field(description="World-space center of the current cell")
    world_y: float
    next_world_x: float = Field(description="World-space center of the destination cell")
    next_world_y: float
    current_cell: int
    next_cell: int
    health: int
    max_health: int
    state: str
    target: int | None = None
    ticks_per_move: int
    ticks_per_attack: int
    started_move_at: int
    started_attack_at: int | None = None
    destroy_at: int | None = None
    move_progress: float = Field(0.0, description="Fraction of the current hex traversal completed")


# --- Map ---

class MapResponse(BaseModel):
    width: int
    height: int
    cell_count: int
    occupied: list[int] = Field(description="RLE of occupancy flags: [value, count, value, count, ...]")


class CellResponse(BaseModel):
    index: int
    x: int
    y: int
    occupied: bool


# --- World State ---

class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)


class WorldStateResponse(BaseModel):
    step: int
    time: float
    alive_count: int
    entities: list[EntitySchema]
    events: list[EventSchema] = Field(default_factory=list)


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


# --- Config ---

class SimulationConfigResponse(BaseModel):
    seed: int
    map_width: int
    map_height: int
    entity_count: int
    time_step_ms: int
    max_ticks: int
    attack_distance: int
    destroy_delay: int
    hex_radius: float
    tick_rate: float


# --- Stats ---

class SimulationStats(BaseModel):
    tick: int
    alive_count: int
    dying_count: int
    stored_count: int
    event_count: int
    running: bool
    paused: bool
    finished: bool
