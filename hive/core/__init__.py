"""Core data models: enums, goals, terrain and room objects."""

from hive.core.enums import FindKind, IntentKind, Outcome, ResultCode, Role, Terrain
from hive.core.goals import Build, Deliver, Goal, Harvest, Upgrade
from hive.core.grid import RoomTerrain
from hive.core.models import Position, Source, Store, Unit

__all__ = [
    "Build",
    "Deliver",
    "FindKind",
    "Goal",
    "Harvest",
    "IntentKind",
    "Outcome",
    "Position",
    "ResultCode",
    "Role",
    "RoomTerrain",
    "Source",
    "Store",
    "Terrain",
    "Unit",
    "Upgrade",
]
