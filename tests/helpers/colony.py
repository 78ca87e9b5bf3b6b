"""ColonyArena - test fixture for unit behaviour.

Creates a small hand-built room with a full WorldLoop pipeline.  Place
objects and units, run ticks, then inspect the world and the memory.

Usage:
    arena = ColonyArena()
    src = arena.add_source(5, 5)
    u = arena.add_unit("a", 2, 2, role=Role.UPGRADER)
    arena.run_ticks(3)
    assert arena.goal("a") == Harvest(src.id)
"""

from __future__ import annotations

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from hive.config import SimulationConfig
from hive.core.enums import Role, Terrain
from hive.core.goals import Goal
from hive.core.grid import RoomTerrain
from hive.core.models import (
    ConstructionSite,
    Controller,
    Mineral,
    Position,
    Source,
    Spawn,
    Store,
    Unit,
)
from hive.core.world_state import WorldState
from hive.engine.world_loop import WorldLoop
from hive.memory.codec import UnitState, decode_unit, encode_unit
from hive.memory.store import MemoryStore
from hive.utils.event_log import SimEvent

ROOM = "W1N1"


class ColonyArena:
    """A single plain room, no spawning unless asked for."""

    def __init__(self, size: int = 10, room: str = ROOM, **config_overrides):
        defaults = dict(
            room_size=size,
            max_ticks=9999,
            max_units=0,
            spawn_time=0,
            tick_budget_ms=10_000.0,
        )
        defaults.update(config_overrides)
        self.config = SimulationConfig(**defaults)
        self.room = room

        self.world = WorldState(self.config)
        self.world.add_room(RoomTerrain(room, size))
        self.store = MemoryStore()
        self.loop = WorldLoop(self.config, self.world, self.store)
        self._all_events: list[SimEvent] = []

    # -- builders --

    def pos(self, x: int, y: int) -> Position:
        return Position(self.room, x, y)

    def set_tile(self, x: int, y: int, terrain: Terrain) -> None:
        self.world.terrain(self.room).set(x, y, terrain)

    def wall_ring(self, cx: int, cy: int) -> None:
        """Wall in every tile around (cx, cy)."""
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx or dy:
                    self.set_tile(cx + dx, cy + dy, Terrain.WALL)

    def add_source(self, x: int, y: int, energy: int = 3000) -> Source:
        src = Source(id=self.world.allocate_id(), pos=self.pos(x, y), energy=energy, energy_capacity=3000)
        self.world.add_object(src)
        return src

    def add_controller(self, x: int, y: int) -> Controller:
        ctrl = Controller(id=self.world.allocate_id(), pos=self.pos(x, y))
        self.world.add_object(ctrl)
        return ctrl

    def add_spawn(self, x: int, y: int, energy: int = 300, capacity: int = 300) -> Spawn:
        spawn = Spawn(id=self.world.allocate_id(), pos=self.pos(x, y), store=Store(capacity, energy))
        self.world.add_object(spawn)
        return spawn

    def add_site(self, x: int, y: int, progress_total: int = 100) -> ConstructionSite:
        site = ConstructionSite(id=self.world.allocate_id(), pos=self.pos(x, y), progress_total=progress_total)
        self.world.add_object(site)
        return site

    def add_mineral(self, x: int, y: int) -> Mineral:
        mineral = Mineral(id=self.world.allocate_id(), pos=self.pos(x, y))
        self.world.add_object(mineral)
        return mineral

    def add_unit(
        self,
        name: str,
        x: int,
        y: int,
        *,
        role: Role | None = Role.UPGRADER,
        goal: Goal | None = None,
        energy: int = 0,
        capacity: int = 50,
        spawning: bool = False,
        my: bool = True,
        memory: dict | None = None,
    ) -> Unit:
        unit = Unit(
            id=self.world.allocate_id(),
            pos=self.pos(x, y),
            name=name,
            store=Store(capacity, energy),
            my=my,
            spawning=spawning,
        )
        self.world.add_unit(unit)
        if memory is not None:
            self.store.set_unit(name, memory)
        elif role is not None or goal is not None:
            self.store.set_unit(name, encode_unit(UnitState(role=role, goal=goal, home_room=self.room)))
        return unit

    # -- running --

    def run_ticks(self, n: int = 1) -> list[SimEvent]:
        events: list[SimEvent] = []
        for _ in range(n):
            self.loop.tick_once()
            events.extend(self.loop.tick_events)
        self._all_events.extend(events)
        return events

    # -- inspection --

    @property
    def all_events(self) -> list[SimEvent]:
        return self._all_events

    def unit(self, name: str) -> Unit:
        return self.world.units[name]

    def memory(self, name: str) -> UnitState:
        return decode_unit(self.store.get_unit(name), name)

    def goal(self, name: str) -> Goal | None:
        return self.memory(name).goal
