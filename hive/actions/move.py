"""MoveAction - validates and applies single-step movement intents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hive.actions.base import Intent
from hive.core.enums import ResultCode
from hive.core.models import Position

if TYPE_CHECKING:
    from hive.core.models import Unit
    from hive.core.world_state import WorldState

logger = logging.getLogger(__name__)


class MoveAction:
    """Stateless handler for MOVE intents.

    ``validate`` answers the caller immediately; whether the step really
    happens is only known once the tick's intents are resolved, because
    another unit may claim the tile first.
    """

    @staticmethod
    def validate(unit: Unit, dest: Position, world: WorldState) -> ResultCode:
        if not unit.my:
            return ResultCode.NOT_OWNER
        if unit.spawning:
            return ResultCode.BUSY
        if dest.room != unit.pos.room or unit.pos.range_to(dest) != 1:
            return ResultCode.INVALID_ARGS
        return ResultCode.OK

    @staticmethod
    def apply(intent: Intent, world: WorldState, occupied: set[Position]) -> bool:
        unit = world.units.get(intent.unit_name)
        if unit is None or unit.spawning:
            return False

        dest: Position = intent.target
        if not world.terrain(dest.room).is_walkable(dest.x, dest.y):
            logger.debug("Unit %s blocked by terrain at %s", unit.name, dest)
            return False
        if world.obstacle_at(dest):
            logger.debug("Unit %s blocked by structure at %s", unit.name, dest)
            return False
        if dest in occupied:
            logger.debug("Unit %s blocked by occupant at %s", unit.name, dest)
            return False

        occupied.discard(unit.pos)
        occupied.add(dest)
        world.move_unit(unit, dest)
        return True
