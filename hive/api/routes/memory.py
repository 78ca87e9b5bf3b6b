"""GET /api/v1/memory - the persisted unit and room records."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from hive.api.dependencies import get_engine_manager
from hive.api.engine_manager import EngineManager
from hive.api.schemas import MemoryResponse, UnitMemoryResponse
from hive.core.goals import describe
from hive.memory.codec import decode_unit

router = APIRouter()


@router.get("/memory", response_model=MemoryResponse)
def get_memory(manager: EngineManager = Depends(get_engine_manager)) -> MemoryResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")
    return MemoryResponse(
        tick=snapshot.tick,
        units=dict(snapshot.memory_units),
        rooms=dict(snapshot.memory_rooms),
    )


@router.get("/memory/units/{name}", response_model=UnitMemoryResponse)
def get_unit_memory(name: str, manager: EngineManager = Depends(get_engine_manager)) -> UnitMemoryResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")
    blob = snapshot.memory_units.get(name)
    if blob is None:
        raise HTTPException(status_code=404, detail=f"No memory for unit {name!r}.")
    return UnitMemoryResponse(
        name=name,
        tick=snapshot.tick,
        memory=blob,
        goal=describe(decode_unit(blob, name).goal),
    )
