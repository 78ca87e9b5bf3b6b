"""GET /api/v1/state - units, room objects and recent events."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from hive.api.dependencies import get_engine_manager
from hive.api.engine_manager import EngineManager
from hive.api.schemas import (
    EventSchema,
    RoomObjectSchema,
    SimulationStats,
    UnitSchema,
    WorldStateResponse,
)
from hive.core.goals import describe
from hive.core.models import ConstructionSite, RoomObject, Source, Spawn, Unit
from hive.memory.codec import decode_unit

router = APIRouter()


def _serialize_unit(unit: Unit, blob: dict | None) -> UnitSchema:
    memory = decode_unit(blob, unit.name)
    return UnitSchema(
        name=unit.name,
        id=unit.id,
        room=unit.pos.room,
        x=unit.pos.x,
        y=unit.pos.y,
        energy=unit.store.energy,
        capacity=unit.store.capacity,
        spawning=unit.spawning,
        said=unit.said,
        role=memory.role.value if memory.role else None,
        goal=describe(memory.goal),
        working=memory.working,
    )


def _serialize_object(obj: RoomObject) -> RoomObjectSchema:
    schema = RoomObjectSchema(
        id=obj.id, kind=type(obj).__name__.lower(), room=obj.pos.room, x=obj.pos.x, y=obj.pos.y,
    )
    match obj:
        case Source():
            schema.energy = obj.energy
        case Spawn():
            schema.energy = obj.store.energy
        case ConstructionSite():
            schema.progress = obj.progress
            schema.progress_total = obj.progress_total
    return schema


@router.get("/state", response_model=WorldStateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    category: list[str] | None = Query(None, description="Only return events of these categories"),
    manager: EngineManager = Depends(get_engine_manager),
) -> WorldStateResponse:
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")

    units = [
        _serialize_unit(unit, snapshot.memory_units.get(name))
        for name, unit in snapshot.units.items()
    ]
    events = [
        EventSchema(tick=e.tick, category=e.category, message=e.message, unit_names=list(e.unit_names))
        for e in manager.event_log.since_tick(since_tick, category)
    ]
    return WorldStateResponse(
        tick=snapshot.tick,
        unit_count=len(units),
        rooms=list(snapshot.rooms),
        units=units,
        objects=[_serialize_object(o) for o in snapshot.objects],
        events=events,
    )


@router.get("/stats", response_model=SimulationStats)
def get_stats(manager: EngineManager = Depends(get_engine_manager)) -> SimulationStats:
    snapshot = manager.get_snapshot()
    return SimulationStats(
        tick=snapshot.tick if snapshot else 0,
        unit_count=len(snapshot.units) if snapshot else 0,
        total_spawned=manager.total_spawned,
        running=manager.running,
        paused=manager.paused,
        last_tick_ms=manager.last_tick_ms,
    )
