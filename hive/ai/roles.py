"""Role policies - what a unit with no goal should do next.

  GATHERER   carrying energy → Build(first site), else Harvest(best node)
             empty           → Harvest(best node)
  UPGRADER   full            → Upgrade(controller)
             otherwise       → Harvest(best node)
  HARVESTER  signals intent only, never takes a goal

``None`` is a valid answer: with no node (or no controller) in the room
the unit waits a tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hive.ai.node_selector import best_node
from hive.core.enums import FindKind, Role
from hive.core.goals import Build, Goal, Harvest, Upgrade

if TYPE_CHECKING:
    from hive.core.models import Unit
    from hive.core.world_state import WorldState
    from hive.memory.codec import UnitState
    from hive.memory.room_cache import RoomCache

logger = logging.getLogger(__name__)


class RolePolicy:
    __slots__ = ("_world", "_cache")

    def __init__(self, world: WorldState, cache: RoomCache | None = None) -> None:
        self._world = world
        self._cache = cache

    def assign(self, unit: Unit, memory: UnitState) -> Goal | None:
        match memory.role:
            case Role.GATHERER:
                return self._gatherer(unit, memory)
            case Role.UPGRADER:
                return self._upgrader(unit, memory)
            case Role.HARVESTER:
                self._world.say(unit, "harvesting")
                return None
        logger.warning("Unit %s has no role, cannot assign a goal", unit.name)
        return None

    def _gatherer(self, unit: Unit, memory: UnitState) -> Goal | None:
        if not unit.is_empty():
            sites = self._world.find(unit.room_name, FindKind.CONSTRUCTION_SITES)
            if sites:
                return Build(sites[0].id)
        return self._harvest(unit, memory)

    def _upgrader(self, unit: Unit, memory: UnitState) -> Goal | None:
        if unit.is_full():
            controller = self._world.controller(unit.room_name)
            return Upgrade(controller.id) if controller else None
        return self._harvest(unit, memory)

    def _harvest(self, unit: Unit, memory: UnitState) -> Goal | None:
        node = best_node(
            self._world, unit.room_name, self._cache,
            exclude=memory.excluded_nodes(self._world.tick),
        )
        if node is None:
            logger.debug("Unit %s: no node in %s, waiting", unit.name, unit.room_name)
            return None
        return Harvest(node.id)
