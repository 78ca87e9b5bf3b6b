"""UnitBrain - one unit's complete step for one tick.

  load memory → adopt a role if missing → assign a goal if none
  → advance the goal → persist memory

Nothing survives between calls except what ``encode_unit`` writes back to
the MemoryStore.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hive.ai.movement import MovementPlanner
from hive.ai.roles import RolePolicy
from hive.ai.states import TaskMachine
from hive.core.enums import DEFAULT_ROLE
from hive.core.goals import Build, Deliver, Goal, Upgrade, describe
from hive.memory.codec import UnitState, decode_unit, encode_unit

if TYPE_CHECKING:
    from hive.config import SimulationConfig
    from hive.core.models import Unit
    from hive.core.world_state import WorldState
    from hive.memory.room_cache import RoomCache
    from hive.memory.store import MemoryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StepResult:
    """What one unit's step did to its goal."""

    unit_name: str
    before: Goal | None
    assigned: Goal | None
    after: Goal | None

    @property
    def changed(self) -> bool:
        return self.before != self.after


class UnitBrain:
    """Wires the role policy, the task machine and the memory codec together."""

    __slots__ = ("_world", "_store", "_policy", "_machine")

    def __init__(
        self,
        world: WorldState,
        store: MemoryStore,
        config: SimulationConfig,
        cache: RoomCache | None = None,
    ) -> None:
        self._world = world
        self._store = store
        self._policy = RolePolicy(world, cache)
        self._machine = TaskMachine(world, config, MovementPlanner(world, config), cache)

    @property
    def policy(self) -> RolePolicy:
        return self._policy

    @property
    def machine(self) -> TaskMachine:
        return self._machine

    def load(self, unit: Unit) -> UnitState:
        memory = decode_unit(self._store.get_unit(unit.name), unit.name)
        if memory.role is None:
            logger.info("Unit %s has no role, adopting %s", unit.name, DEFAULT_ROLE.value)
            memory.role = DEFAULT_ROLE
        if memory.home_room is None:
            memory.home_room = unit.room_name
        memory.expire_exclusions(self._world.tick)
        return memory

    def save(self, unit: Unit, memory: UnitState) -> None:
        self._store.set_unit(unit.name, encode_unit(memory))

    def step(self, unit: Unit) -> StepResult:
        memory = self.load(unit)
        before = memory.goal

        assigned = None
        if memory.goal is None:
            assigned = self._policy.assign(unit, memory)
            memory.goal = assigned

        memory.goal = self._machine.advance(unit, memory.goal, memory)
        memory.working = isinstance(memory.goal, (Upgrade, Build, Deliver))
        self.save(unit, memory)

        if before != memory.goal:
            logger.debug("Unit %s: %s -> %s", unit.name, describe(before), describe(memory.goal))
        return StepResult(unit.name, before, assigned, memory.goal)
