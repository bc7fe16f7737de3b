"""GET /api/v1/config — expose simulation configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hexarena.api.dependencies import get_engine_manager
from hexarena.api.engine_manager import EngineManager
from hexarena.api.schemas import SimulationConfigResponse

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> SimulationConfigResponse:
    cfg = manager.config
    return SimulationConfigResponse(
        seed=cfg.seed,
        map_width=cfg.map_width,
        map_height=cfg.map_height,
        entity_count=cfg.entity_count,
        time_step_ms=cfg.time_step_ms,
        max_ticks=cfg.max_ticks,
        attack_distance=cfg.attack_distance,
        destroy_delay=cfg.destroy_delay,
        hex_radius=cfg.hex_radius,
        tick_rate=manager.tick_rate,
    )
