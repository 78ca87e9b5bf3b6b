"""Pydantic response models for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# --- Units & room objects ---

class UnitSchema(BaseModel):
    name: str
    id: str
    room: str
    x: int
    y: int
    energy: int
    capacity: int
    spawning: bool = False
    said: str | None = None
    role: str | None = None
    goal: str = "none"
    working: bool | None = None


class RoomObjectSchema(BaseModel):
    id: str
    kind: str
    room: str
    x: int
    y: int
    energy: int | None = None
    progress: int | None = None
    progress_total: int | None = None


class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    unit_names: list[str] = Field(default_factory=list)


class WorldStateResponse(BaseModel):
    tick: int
    unit_count: int
    rooms: list[str]
    units: list[UnitSchema]
    objects: list[RoomObjectSchema] = Field(default_factory=list)
    events: list[EventSchema] = Field(default_factory=list)


# --- Memory ---

class MemoryResponse(BaseModel):
    tick: int
    units: dict[str, dict[str, Any]]
    rooms: dict[str, dict[str, Any]]


class UnitMemoryResponse(BaseModel):
    name: str
    tick: int
    memory: dict[str, Any]
    goal: str = "none"


# --- Control ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0
    state: str = "stopped"


# --- Config ---

class SimulationConfigResponse(BaseModel):
    world_seed: int
    room_size: int
    num_rooms: int
    max_ticks: int
    tick_budget_ms: float
    max_units: int
    unit_capacity: int
    path_max_ops: int
    snapshot_ttl: int
    node_exclusion_ticks: int
    tick_rate: float


# --- Stats ---

class SimulationStats(BaseModel):
    tick: int
    unit_count: int
    total_spawned: int
    running: bool
    paused: bool
    last_tick_ms: float = 0.0
