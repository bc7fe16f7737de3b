"""GET /api/v1/state — dynamic entity & event data (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from hexarena.api.dependencies import get_engine_manager
from hexarena.api.engine_manager import EngineManager
from hexarena.api.schemas import EntitySchema, EventSchema, SimulationStats, WorldStateResponse
from hexarena.core.enums import NONE
from hexarena.core.hexmath import hex_to_world
from hexarena.core.models import Entity
from hexarena.core.snapshot import Snapshot

router = APIRouter()


def _optional(value: int) -> int | None:
    return None if value == NONE else value


def serialize_entity(e: Entity, snapshot: Snapshot, hex_radius: float = 1.0) -> EntitySchema:
    here = snapshot.to_point(e.current_cell)
    there = snapshot.to_point(e.next_cell)
    world_x, world_y = hex_to_world(here, hex_radius)
    next_world_x, next_world_y = hex_to_world(there, hex_radius)
    return EntitySchema(
        id=e.id,
        x=here.x,
        y=here.y,
        next_x=there.x,
        next_y=there.y,
        world_x=world_x,
        world_y=world_y,
        next_world_x=next_world_x,
        next_world_y=next_world_y,
        current_cell=e.current_cell,
        next_cell=e.next_cell,
        health=e.health,
        max_health=e.max_health,
        state=e.state().name,
        target=_optional(e.target),
        ticks_per_move=e.ticks_per_move,
        ticks_per_attack=e.ticks_per_attack,
        started_move_at=e.started_move_at,
        started_attack_at=_optional(e.started_attack_at),
        destroy_at=_optional(e.destroy_at),
        move_progress=e.move_progress(snapshot.step),
    )


def _require_snapshot(manager: EngineManager) -> Snapshot:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")
    return snapshot


@router.get("/state", response_model=WorldStateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    manager: EngineManager = Depends(get_engine_manager),
) -> WorldStateResponse:
    snapshot = _require_snapshot(manager)
    events = [
        EventSchema(tick=ev.tick, category=ev.category, message=ev.message, entity_ids=list(ev.entity_ids))
        for ev in manager.event_log.since_tick(since_tick)
    ]
    return WorldStateResponse(
        step=snapshot.step,
        time=snapshot.time,
        alive_count=snapshot.alive_count,
        entities=[serialize_entity(e, snapshot, manager.config.hex_radius) for e in snapshot.ordered_entities()],
        events=events,
    )


@router.get("/entities/{entity_id}", response_model=EntitySchema)
def get_entity(
    entity_id: int,
    manager: EngineManager = Depends(get_engine_manager),
) -> EntitySchema:
    snapshot = _require_snapshot(manager)
    entity = snapshot.entities.get(entity_id)
    if entity is None:
        raise HTTPException(status_code=404, detail=f"Entity {entity_id} not found.")
    return serialize_entity(entity, snapshot, manager.config.hex_radius)


@router.get("/stats", response_model=SimulationStats)
def get_stats(manager: EngineManager = Depends(get_engine_manager)) -> SimulationStats:
    snapshot = _require_snapshot(manager)
    alive = snapshot.alive_count
    return SimulationStats(
        tick=snapshot.step,
        alive_count=alive,
        dying_count=len(snapshot.entities) - alive,
        stored_count=len(snapshot.entities),
        event_count=len(manager.event_log),
        running=manager.running,
        paused=manager.paused,
        finished=manager.finished,
    )
