"""Mutable authoritative world state - the World Interface the unit logic talks to.

Queries (``resolve``, ``find``, ``terrain_at``) read live state.  Action
primitives validate against live state, register an intent and return a
``ResultCode`` right away; the WorldLoop applies the intents once every
unit has run, so nothing a unit does is visible to another unit before the
next tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from hive.actions.base import Intent
from hive.actions.move import MoveAction
from hive.actions.work import BuildAction, HarvestAction, TransferAction, UpgradeAction
from hive.core.enums import FindKind, IntentKind, ResultCode, Terrain
from hive.core.models import (
    ConstructionSite,
    Controller,
    Mineral,
    Position,
    RoomObject,
    Source,
    Spawn,
    Structure,
    Unit,
)

if TYPE_CHECKING:
    from hive.config import SimulationConfig
    from hive.core.grid import RoomTerrain

logger = logging.getLogger(__name__)

_FIND_TYPES: dict[FindKind, type] = {
    FindKind.SOURCES: Source,
    FindKind.SOURCES_ACTIVE: Source,
    FindKind.CONSTRUCTION_SITES: ConstructionSite,
    FindKind.SPAWNS: Spawn,
    FindKind.MINERALS: Mineral,
    FindKind.CONTROLLERS: Controller,
}


def is_obstacle(obj: RoomObject) -> bool:
    """True for objects nothing can walk onto: anything but units, sites and roads."""
    if isinstance(obj, (Unit, ConstructionSite)):
        return False
    return not (isinstance(obj, Structure) and obj.structure_type == "road")


class WorldState:
    """The single source of truth for the simulation."""

    __slots__ = ("config", "tick", "rooms", "objects", "units", "intents", "_next_id")

    def __init__(self, config: SimulationConfig) -> None:
        self.config = config
        self.tick: int = 0
        self.rooms: dict[str, RoomTerrain] = {}
        self.objects: dict[str, RoomObject] = {}
        self.units: dict[str, Unit] = {}
        self.intents: dict[tuple[str, IntentKind], Intent] = {}
        self._next_id: int = 1

    # -- construction --

    def allocate_id(self) -> str:
        oid = f"{self._next_id:012x}"
        self._next_id += 1
        return oid

    def add_room(self, terrain: RoomTerrain) -> None:
        self.rooms[terrain.name] = terrain

    def add_object(self, obj: RoomObject) -> None:
        self.objects[obj.id] = obj

    def remove_object(self, object_id: str) -> RoomObject | None:
        return self.objects.pop(object_id, None)

    def add_unit(self, unit: Unit) -> None:
        self.units[unit.name] = unit
        self.objects[unit.id] = unit

    def remove_unit(self, name: str) -> Unit | None:
        unit = self.units.pop(name, None)
        if unit is not None:
            self.objects.pop(unit.id, None)
        return unit

    def move_unit(self, unit: Unit, dest: Position) -> None:
        unit.pos = dest

    def complete_site(self, site: ConstructionSite) -> Structure:
        """Replace a finished site with its structure; the site id stops resolving."""
        self.objects.pop(site.id, None)
        structure = Structure(id=self.allocate_id(), pos=site.pos, structure_type=site.structure_type)
        self.objects[structure.id] = structure
        logger.info("Construction of %s at %s finished", site.structure_type, site.pos)
        return structure

    # -- queries --

    def resolve(self, object_id: str | None) -> RoomObject | None:
        """Fresh live reference for *object_id*, or None if it no longer exists."""
        if object_id is None:
            return None
        return self.objects.get(object_id)

    def terrain(self, room: str) -> RoomTerrain:
        return self.rooms[room]

    def terrain_at(self, room: str, x: int, y: int) -> Terrain:
        terrain = self.rooms.get(room)
        if terrain is None:
            return Terrain.WALL
        return terrain.get(x, y)

    def find(self, room: str, kind: FindKind) -> list[RoomObject]:
        """Objects of *kind* in *room*, in creation order."""
        if kind in (FindKind.UNITS, FindKind.MY_UNITS):
            return [
                u for u in self.units.values()
                if u.pos.room == room and (kind == FindKind.UNITS or u.my)
            ]
        cls = _FIND_TYPES[kind]
        found = [o for o in self.objects.values() if isinstance(o, cls) and o.pos.room == room]
        if kind == FindKind.SOURCES_ACTIVE:
            found = [s for s in found if s.energy > 0]
        return found

    def units_in(self, room: str) -> list[Unit]:
        return [u for u in self.units.values() if u.pos.room == room]

    def obstacle_at(self, pos: Position) -> bool:
        """True if a non-walkable object sits on *pos*."""
        return any(obj.pos == pos and is_obstacle(obj) for obj in self.objects.values())

    def unit_at(self, pos: Position) -> Unit | None:
        for unit in self.units.values():
            if unit.pos == pos:
                return unit
        return None

    def controller(self, room: str) -> Controller | None:
        for obj in self.find(room, FindKind.CONTROLLERS):
            return obj
        return None

    def my_units(self) -> Iterator[Unit]:
        """Owned units in deterministic (name) order."""
        for name in sorted(self.units):
            unit = self.units[name]
            if unit.my:
                yield unit

    # -- action primitives --

    def _register(self, unit: Unit, kind: IntentKind, target: object, amount: int = 0) -> None:
        # One intent per unit and kind; a later call in the same tick replaces it.
        self.intents[(unit.name, kind)] = Intent(unit.name, kind, target, amount)

    def harvest(self, unit: Unit, target: RoomObject | None) -> ResultCode:
        code = HarvestAction.validate(unit, target, self)
        if code == ResultCode.OK:
            self._register(unit, IntentKind.HARVEST, target.id)
        return code

    def build(self, unit: Unit, target: RoomObject | None) -> ResultCode:
        code = BuildAction.validate(unit, target, self)
        if code == ResultCode.OK:
            self._register(unit, IntentKind.BUILD, target.id)
        return code

    def upgrade(self, unit: Unit, target: RoomObject | None) -> ResultCode:
        code = UpgradeAction.validate(unit, target, self)
        if code == ResultCode.OK:
            self._register(unit, IntentKind.UPGRADE, target.id)
        return code

    def transfer(self, unit: Unit, target: RoomObject | None, amount: int | None = None) -> ResultCode:
        code = TransferAction.validate(unit, target, self)
        if code == ResultCode.OK:
            self._register(unit, IntentKind.TRANSFER, target.id, amount or 0)
        return code

    def move(self, unit: Unit, dest: Position) -> ResultCode:
        code = MoveAction.validate(unit, dest, self)
        if code == ResultCode.OK:
            self._register(unit, IntentKind.MOVE, dest)
        return code

    def say(self, unit: Unit, text: str) -> ResultCode:
        if not unit.my:
            return ResultCode.NOT_OWNER
        unit.said = text
        return ResultCode.OK

    def drain_intents(self) -> list[Intent]:
        intents = list(self.intents.values())
        self.intents.clear()
        return intents
