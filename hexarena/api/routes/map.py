"""GET /api/v1/map and /api/v1/cells/{index} — grid geometry and occupancy."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from hexarena.api.dependencies import get_engine_manager
from hexarena.api.engine_manager import EngineManager
from hexarena.api.schemas import CellResponse, MapResponse

router = APIRouter()


def rle_encode(flags: tuple[bool, ...]) -> list[int]:
    """RLE encode: [value, count, value, count, ...]"""
    rle: list[int] = []
    if not flags:
        return rle
    cur_val = int(flags[0])
    cur_count = 1
    for flag in flags[1:]:
        v = int(flag)
        if v == cur_val:
            cur_count += 1
        else:
            rle.append(cur_val)
            rle.append(cur_count)
            cur_val = v
            cur_count = 1
    rle.append(cur_val)
    rle.append(cur_count)
    return rle


@router.get("/map", response_model=MapResponse)
def get_map(manager: EngineManager = Depends(get_engine_manager)) -> MapResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Simulation not initialized yet.")
    return MapResponse(
        width=snapshot.width,
        height=snapshot.height,
        cell_count=snapshot.width * snapshot.height,
        occupied=rle_encode(snapshot.occupied),
    )


@router.get("/cells/{index}", response_model=CellResponse)
def get_cell(index: int, manager: EngineManager = Depends(get_engine_manager)) -> CellResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="Simulation not initialized yet.")
    if not 0 <= index < len(snapshot.occupied):
        raise HTTPException(status_code=400, detail=f"Cell index {index} out of range.")
    p = snapshot.to_point(index)
    return CellResponse(index=index, x=p.x, y=p.y, occupied=snapshot.occupied[index])
