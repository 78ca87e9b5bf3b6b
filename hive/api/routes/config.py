"""GET /api/v1/config - the configuration the engine was built with."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hive.api.dependencies import get_engine_manager
from hive.api.engine_manager import EngineManager
from hive.api.schemas import SimulationConfigResponse

router = APIRouter()


@router.get("/config", response_model=SimulationConfigResponse)
def get_config(manager: EngineManager = Depends(get_engine_manager)) -> SimulationConfigResponse:
    fields = {
        name: getattr(manager.config, name)
        for name in SimulationConfigResponse.model_fields
        if name != "tick_rate"
    }
    return SimulationConfigResponse(**fields, tick_rate=manager.tick_rate)
