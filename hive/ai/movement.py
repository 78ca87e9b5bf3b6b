"""Movement planner - one occupancy-aware step toward a destination per tick.

The cost overlay marks every tile holding another unit (and every
non-walkable object) as blocked for this search only.  It is rebuilt on
every call because units move every tick, so no path outlives the tick it
was computed in.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hive.ai.pathfinding import CostMatrix, Pathfinder
from hive.core.enums import Outcome, ResultCode
from hive.core.models import Unit
from hive.core.world_state import WorldState, is_obstacle

if TYPE_CHECKING:
    from hive.config import SimulationConfig
    from hive.core.models import Position

logger = logging.getLogger(__name__)


class MovementPlanner:
    """Issues at most one move per call and never retries."""

    __slots__ = ("_world", "_config")

    def __init__(self, world: WorldState, config: SimulationConfig) -> None:
        self._world = world
        self._config = config

    def cost_matrix(self, room: str, mover: Unit | None = None) -> CostMatrix:
        """Per-tick overlay for *room*: other units and obstacles get ``occupied_cost``."""
        matrix = CostMatrix()
        cost = self._config.occupied_cost
        for obj in self._world.objects.values():
            if obj.pos.room != room or obj is mover:
                continue
            if isinstance(obj, Unit) or is_obstacle(obj):
                matrix.set(obj.pos.x, obj.pos.y, cost)
        return matrix

    def move_toward(self, unit: Unit, destination: Position, range_: int = 1) -> Outcome:
        if unit.pos.range_to(destination) <= range_:
            return Outcome.ARRIVED
        if destination.room != unit.pos.room or destination.room not in self._world.rooms:
            logger.debug("Unit %s: %s is outside its room", unit.name, destination)
            return Outcome.NO_PATH

        pf = Pathfinder(
            self._world.terrain(unit.pos.room),
            plain_cost=self._config.plain_cost,
            swamp_cost=self._config.swamp_cost,
            max_ops=self._config.path_max_ops,
        )
        result = pf.search(unit.pos, destination, range_=range_, matrix=self.cost_matrix(unit.pos.room, unit))
        if result.incomplete or not result.path:
            logger.debug("Unit %s: no path to %s after %d ops", unit.name, destination, result.ops)
            return Outcome.NO_PATH

        code = self._world.move(unit, result.path[0])
        if code != ResultCode.OK:
            logger.debug("Unit %s: move to %s refused (%s)", unit.name, result.path[0], code.name)
            return Outcome.NO_PATH
        return Outcome.MOVING
