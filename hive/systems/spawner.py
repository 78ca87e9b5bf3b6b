"""Spawner - host spawning policy: keep the colony at ``max_units``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hive.core.enums import FindKind, Role, Terrain
from hive.core.models import NEIGHBOR_OFFSETS, Position, Spawn, Store, Unit
from hive.memory.codec import UnitState, decode_unit, encode_unit

if TYPE_CHECKING:
    from hive.config import SimulationConfig
    from hive.core.world_state import WorldState
    from hive.memory.store import MemoryStore

logger = logging.getLogger(__name__)


def count_alive(world: WorldState, store: MemoryStore, role: Role, home_room: str | None = None) -> int:
    """Units alive in the world whose memory carries *role* (and *home_room*, if given)."""
    count = 0
    for unit in world.units.values():
        memory = decode_unit(store.get_unit(unit.name), unit.name)
        if memory.role != role:
            continue
        if home_room is not None and memory.home_room != home_room:
            continue
        count += 1
    return count


class Spawner:
    """Creates upgraders from each spawn while the unit cap allows it.

    Names are ``"{tick}-{n}"`` with ``n`` counting the units created this
    tick, so they are unique.  They order as plain strings, not by age:
    ``"10-0"`` runs before ``"9-0"``.
    """

    __slots__ = ("_config", "_store")

    def __init__(self, config: SimulationConfig, store: MemoryStore) -> None:
        self._config = config
        self._store = store

    def run(self, world: WorldState) -> list[Unit]:
        cfg = self._config
        created: list[Unit] = []
        for room in world.rooms:
            for spawn in world.find(room, FindKind.SPAWNS):
                if len(world.units) >= cfg.max_units:
                    logger.debug("Tick %d: unit cap %d reached, not spawning", world.tick, cfg.max_units)
                    return created
                if not spawn.my or spawn.store.energy < cfg.unit_cost:
                    continue
                unit = self._spawn(world, spawn, f"{world.tick}-{len(created)}")
                if unit is not None:
                    created.append(unit)
        return created

    def _spawn(self, world: WorldState, spawn: Spawn, name: str) -> Unit | None:
        pos = self._exit_tile(world, spawn)
        if pos is None:
            logger.warning("Spawn %s could not spawn %s: no free tile", spawn.name, name)
            return None

        spawn.store.remove(self._config.unit_cost)
        unit = Unit(
            id=world.allocate_id(),
            pos=pos,
            name=name,
            store=Store(self._config.unit_capacity),
            spawning=self._config.spawn_time > 0,
            spawn_ticks_left=self._config.spawn_time,
        )
        world.add_unit(unit)
        memory = UnitState(role=Role.UPGRADER, home_room=spawn.pos.room)
        self._store.set_unit(name, encode_unit(memory))
        logger.info("Spawn %s spawning %s at %s", spawn.name, name, pos)
        return unit

    @staticmethod
    def _exit_tile(world: WorldState, spawn: Spawn) -> Position | None:
        for dx, dy in NEIGHBOR_OFFSETS:
            pos = spawn.pos.offset(dx, dy)
            if world.terrain_at(pos.room, pos.x, pos.y) == Terrain.WALL:
                continue
            if world.unit_at(pos) is not None or world.obstacle_at(pos):
                continue
            return pos
        return None
