"""AI layer: node selection, movement, the task state machine and role policies."""

from hive.ai.brain import UnitBrain
from hive.ai.movement import MovementPlanner
from hive.ai.node_selector import best_node
from hive.ai.roles import RolePolicy
from hive.ai.states import TaskMachine

__all__ = ["MovementPlanner", "RolePolicy", "TaskMachine", "UnitBrain", "best_node"]
