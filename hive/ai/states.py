"""Task state machine - executes a unit's goal and decides the next one.

States are the four ``Goal`` variants plus ``None``.  One call to
``TaskMachine.advance`` runs one tick for one unit:

  1. resolve the goal's target id; an id that no longer resolves clears
     the goal without acting,
  2. attempt the goal's action through the world, yielding a ResultCode,
  3. map (goal, code) to the next goal in ``_transition``.

Transitions:
  Harvest  OK → Harvest | FULL, NOT_ENOUGH → None | NOT_IN_RANGE → move
  Upgrade  OK → Upgrade | NOT_ENOUGH → None | NOT_IN_RANGE → move
  Deliver  OK → None | NOT_ENOUGH → Harvest(best node) | FULL → Upgrade(controller)
           NOT_IN_RANGE → move
  Build    OK → Build | NOT_FOUND, NOT_ENOUGH → None | NOT_IN_RANGE → move
  any      BUSY → unchanged | move finds no path → None | anything else → None (logged)

Nothing here is random: the same world and goal always give the same
next goal.  Calling ``advance`` twice in one tick re-registers the same
intents, which replace the first ones.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hive.ai.movement import MovementPlanner
from hive.ai.node_selector import best_node
from hive.core.enums import Outcome, ResultCode
from hive.core.goals import Build, Deliver, Goal, Harvest, Upgrade, describe, target_id

if TYPE_CHECKING:
    from hive.config import SimulationConfig
    from hive.core.models import RoomObject, Unit
    from hive.core.world_state import WorldState
    from hive.memory.codec import UnitState
    from hive.memory.room_cache import RoomCache

logger = logging.getLogger(__name__)


class TaskMachine:
    """The single place where goals are executed and cleared."""

    __slots__ = ("_world", "_config", "_planner", "_cache")

    def __init__(
        self,
        world: WorldState,
        config: SimulationConfig,
        planner: MovementPlanner | None = None,
        cache: RoomCache | None = None,
    ) -> None:
        self._world = world
        self._config = config
        self._planner = planner or MovementPlanner(world, config)
        self._cache = cache

    def advance(self, unit: Unit, goal: Goal | None, memory: UnitState | None = None) -> Goal | None:
        """Run *goal* for this tick and return the goal for the next one."""
        if goal is None:
            return None

        target = self._world.resolve(target_id(goal))
        if target is None:
            logger.debug("Unit %s: target of %s is gone", unit.name, describe(goal))
            return None

        if isinstance(goal, Harvest) and unit.is_full():
            return None

        code = self._attempt(unit, goal, target)
        return self._transition(unit, goal, target, code, memory)

    # -- step 2: act --

    def _attempt(self, unit: Unit, goal: Goal, target: RoomObject) -> ResultCode:
        world = self._world
        match goal:
            case Harvest():
                return world.harvest(unit, target)
            case Upgrade():
                return world.upgrade(unit, target)
            case Deliver():
                return world.transfer(unit, target)
            case Build():
                return world.build(unit, target)
        raise TypeError(f"not a goal: {goal!r}")

    # -- step 3: decide --

    def _transition(
        self,
        unit: Unit,
        goal: Goal,
        target: RoomObject,
        code: ResultCode,
        memory: UnitState | None,
    ) -> Goal | None:
        match goal, code:
            case _, ResultCode.BUSY:
                return goal
            case _, ResultCode.NOT_IN_RANGE:
                return self._approach(unit, goal, target, memory)

            case Harvest(), ResultCode.OK:
                return goal
            case Harvest(), ResultCode.FULL | ResultCode.NOT_ENOUGH:
                return None
            case Harvest(), ResultCode.NO_PATH:
                self._exclude(goal, memory)
                return None

            case Upgrade(), ResultCode.OK:
                return goal
            case Upgrade(), ResultCode.NOT_ENOUGH:
                return None

            case Deliver(), ResultCode.OK:
                return None
            case Deliver(), ResultCode.NOT_ENOUGH:
                return self._harvest_goal(unit, memory)
            case Deliver(), ResultCode.FULL:
                return self._upgrade_goal(unit)

            case Build(), ResultCode.OK:
                return goal
            case Build(), ResultCode.NOT_FOUND | ResultCode.NOT_ENOUGH:
                return None

        logger.error("Unit %s: unexpected result %s for %s, dropping goal", unit.name, code.name, describe(goal))
        return None

    def _approach(self, unit: Unit, goal: Goal, target: RoomObject, memory: UnitState | None) -> Goal | None:
        outcome = self._planner.move_toward(unit, target.pos)
        if outcome == Outcome.NO_PATH:
            logger.debug("Unit %s: no path for %s", unit.name, describe(goal))
            if isinstance(goal, Harvest):
                self._exclude(goal, memory)
            return None
        return goal

    # -- follow-up goals --

    def _harvest_goal(self, unit: Unit, memory: UnitState | None) -> Goal | None:
        exclude = memory.excluded_nodes(self._world.tick) if memory else ()
        node = best_node(self._world, unit.room_name, self._cache, exclude)
        return Harvest(node.id) if node else None

    def _upgrade_goal(self, unit: Unit) -> Goal | None:
        controller = self._world.controller(unit.room_name)
        return Upgrade(controller.id) if controller else None

    def _exclude(self, goal: Harvest, memory: UnitState | None) -> None:
        ticks = self._config.node_exclusion_ticks
        if memory is None or ticks <= 0:
            return
        memory.excluded[goal.node_id] = self._world.tick + ticks
