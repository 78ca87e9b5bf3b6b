"""Work actions - harvest, build, upgrade and transfer.

Each handler mirrors the host game's rules: ``validate`` returns the
result code the caller sees this tick, ``apply`` moves the energy when the
tick's intents are resolved and re-checks whatever may have changed since.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hive.actions.base import Intent
from hive.core.enums import ResultCode
from hive.core.models import ConstructionSite, Controller, Source, Spawn

if TYPE_CHECKING:
    from hive.core.models import RoomObject, Unit
    from hive.core.world_state import WorldState

logger = logging.getLogger(__name__)

HARVEST_RANGE = 1
TRANSFER_RANGE = 1
BUILD_RANGE = 3
UPGRADE_RANGE = 3


def _common(unit: Unit, target: RoomObject | None, world: WorldState) -> ResultCode | None:
    if not unit.my:
        return ResultCode.NOT_OWNER
    if unit.spawning:
        return ResultCode.BUSY
    if target is None or world.resolve(target.id) is None:
        return ResultCode.NOT_FOUND
    return None


class HarvestAction:
    @staticmethod
    def validate(unit: Unit, target: RoomObject | None, world: WorldState) -> ResultCode:
        code = _common(unit, target, world)
        if code is not None:
            return code
        if not isinstance(target, Source):
            return ResultCode.INVALID_TARGET
        if unit.pos.range_to(target.pos) > HARVEST_RANGE:
            return ResultCode.NOT_IN_RANGE
        if target.energy <= 0:
            return ResultCode.NOT_ENOUGH
        if unit.is_full():
            return ResultCode.FULL
        return ResultCode.OK

    @staticmethod
    def apply(intent: Intent, world: WorldState) -> bool:
        unit = world.units.get(intent.unit_name)
        source = world.resolve(intent.target)
        if unit is None or not isinstance(source, Source):
            return False
        amount = min(world.config.harvest_power, source.energy, unit.store.free_capacity)
        if amount <= 0:
            return False
        source.energy -= amount
        unit.store.add(amount)
        if source.energy == 0 and source.ticks_to_regeneration <= 0:
            source.ticks_to_regeneration = world.config.source_regen_ticks
        return True


class BuildAction:
    @staticmethod
    def validate(unit: Unit, target: RoomObject | None, world: WorldState) -> ResultCode:
        code = _common(unit, target, world)
        if code is not None:
            return code
        if not isinstance(target, ConstructionSite):
            return ResultCode.INVALID_TARGET
        if unit.is_empty():
            return ResultCode.NOT_ENOUGH
        if unit.pos.range_to(target.pos) > BUILD_RANGE:
            return ResultCode.NOT_IN_RANGE
        return ResultCode.OK

    @staticmethod
    def apply(intent: Intent, world: WorldState) -> bool:
        unit = world.units.get(intent.unit_name)
        site = world.resolve(intent.target)
        if unit is None or not isinstance(site, ConstructionSite):
            return False
        amount = min(world.config.build_power, unit.store.energy, site.remaining)
        if amount <= 0:
            return False
        unit.store.remove(amount)
        site.progress += amount
        if site.remaining == 0:
            world.complete_site(site)
        return True


class UpgradeAction:
    @staticmethod
    def validate(unit: Unit, target: RoomObject | None, world: WorldState) -> ResultCode:
        code = _common(unit, target, world)
        if code is not None:
            return code
        if not isinstance(target, Controller):
            return ResultCode.INVALID_TARGET
        if not target.my:
            return ResultCode.NOT_OWNER
        if unit.is_empty():
            return ResultCode.NOT_ENOUGH
        if unit.pos.range_to(target.pos) > UPGRADE_RANGE:
            return ResultCode.NOT_IN_RANGE
        return ResultCode.OK

    @staticmethod
    def apply(intent: Intent, world: WorldState) -> bool:
        unit = world.units.get(intent.unit_name)
        controller = world.resolve(intent.target)
        if unit is None or not isinstance(controller, Controller):
            return False
        amount = unit.store.remove(world.config.upgrade_power)
        if amount <= 0:
            return False
        controller.progress += amount
        return True


class TransferAction:
    @staticmethod
    def validate(unit: Unit, target: RoomObject | None, world: WorldState) -> ResultCode:
        code = _common(unit, target, world)
        if code is not None:
            return code
        if not isinstance(target, Spawn):
            return ResultCode.INVALID_TARGET
        if unit.is_empty():
            return ResultCode.NOT_ENOUGH
        if target.store.is_full():
            return ResultCode.FULL
        if unit.pos.range_to(target.pos) > TRANSFER_RANGE:
            return ResultCode.NOT_IN_RANGE
        return ResultCode.OK

    @staticmethod
    def apply(intent: Intent, world: WorldState) -> bool:
        unit = world.units.get(intent.unit_name)
        spawn = world.resolve(intent.target)
        if unit is None or not isinstance(spawn, Spawn):
            return False
        wanted = intent.amount or unit.store.energy
        moved = spawn.store.add(min(wanted, unit.store.energy))
        unit.store.remove(moved)
        if moved == 0:
            logger.debug("Transfer from %s into full %s dropped", unit.name, spawn.name)
        return moved > 0
