"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class Terrain(IntEnum):
    """Static tile terrain of a room."""

    PLAIN = 0
    SWAMP = 1
    WALL = 2


@unique
class ResultCode(IntEnum):
    """Outcome of an attempted action primitive.

    Values mirror the host game's return codes so persisted logs stay
    readable against the host's documentation.
    """

    OK = 0
    NOT_OWNER = -1
    NO_PATH = -2
    BUSY = -4
    NOT_FOUND = -5
    NOT_ENOUGH = -6
    INVALID_TARGET = -7
    FULL = -8
    NOT_IN_RANGE = -9
    INVALID_ARGS = -10
    TIRED = -11


@unique
class Outcome(IntEnum):
    """Result of a single ``MovementPlanner.move_toward`` call."""

    ARRIVED = 0
    MOVING = 1
    NO_PATH = 2


@unique
class Role(str, Enum):
    """Immutable unit archetype; decides the goal policy used on ``None``."""

    GATHERER = "gatherer"
    UPGRADER = "upgrader"
    HARVESTER = "harvester"


DEFAULT_ROLE = Role.UPGRADER


@unique
class FindKind(IntEnum):
    """Spatial query kinds accepted by ``WorldState.find``."""

    SOURCES = 0
    SOURCES_ACTIVE = 1
    UNITS = 2
    MY_UNITS = 3
    CONSTRUCTION_SITES = 4
    SPAWNS = 5
    MINERALS = 6
    CONTROLLERS = 7


@unique
class IntentKind(IntEnum):
    """Kinds of intents a unit can register in one tick.

    Work intents are applied before movement, lowest value first.
    """

    HARVEST = 0
    TRANSFER = 1
    BUILD = 2
    UPGRADE = 3
    MOVE = 4


@unique
class Domain(IntEnum):
    """RNG domains for deterministic randomness isolation."""

    MAP_GEN = 0
    PLACEMENT = 1
