"""Memory codec - converts in-memory unit and room state to and from persisted blobs.

The in-memory side uses the ``Goal`` union from ``hive.core.goals``; the
persisted side uses the pydantic records from ``hive.memory.schemas``.
Only ids cross this boundary, never live objects.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import TypeAdapter, ValidationError

from hive.core.enums import Role
from hive.core.goals import Build, Deliver, Goal, Harvest, Upgrade
from hive.memory.schemas import (
    BuildRecord,
    DeliverRecord,
    GoalRecord,
    HarvestRecord,
    RoomRecord,
    UnitRecord,
    UpgradeRecord,
)

logger = logging.getLogger(__name__)

_GOAL_ADAPTER: TypeAdapter = TypeAdapter(GoalRecord)


@dataclass(slots=True)
class UnitState:
    """Decoded memory of one unit for the duration of its step."""

    role: Role | None = None
    goal: Goal | None = None
    working: bool | None = None
    home_room: str | None = None
    excluded: dict[str, int] = field(default_factory=dict)

    def key(self) -> tuple:
        """The persisted identity tuple: (role, goal, working, home_room)."""
        return (self.role, self.goal, self.working, self.home_room)

    def excluded_nodes(self, tick: int) -> frozenset[str]:
        return frozenset(nid for nid, until in self.excluded.items() if until > tick)

    def expire_exclusions(self, tick: int) -> None:
        for nid in [n for n, until in self.excluded.items() if until <= tick]:
            del self.excluded[nid]


# -- goals --

def goal_to_record(goal: Goal | None) -> GoalRecord | None:
    match goal:
        case None:
            return None
        case Upgrade(controller_id=ref):
            return UpgradeRecord(id=ref)
        case Harvest(node_id=ref):
            return HarvestRecord(id=ref)
        case Deliver(spawn_id=ref):
            return DeliverRecord(id=ref)
        case Build(site_id=ref):
            return BuildRecord(id=ref)
    raise TypeError(f"not a goal: {goal!r}")


def goal_from_record(record: GoalRecord | None) -> Goal | None:
    match record:
        case None:
            return None
        case UpgradeRecord(id=ref):
            return Upgrade(ref)
        case HarvestRecord(id=ref):
            return Harvest(ref)
        case DeliverRecord(id=ref):
            return Deliver(ref)
        case BuildRecord(id=ref):
            return Build(ref)
    raise TypeError(f"not a goal record: {record!r}")


def encode_goal(goal: Goal | None) -> dict[str, Any] | None:
    record = goal_to_record(goal)
    if record is None:
        return None
    return _GOAL_ADAPTER.dump_python(record, mode="json")


def decode_goal(blob: dict[str, Any] | None) -> Goal | None:
    if blob is None:
        return None
    return goal_from_record(_GOAL_ADAPTER.validate_python(blob))


# -- units --

def encode_unit(state: UnitState) -> dict[str, Any]:
    record = UnitRecord(
        role=state.role,
        target=goal_to_record(state.goal),
        working=state.working,
        home_room=state.home_room,
        excluded=dict(state.excluded),
    )
    return record.model_dump(mode="json", by_alias=True, exclude_none=True)


def decode_unit(blob: dict[str, Any] | None, name: str = "?") -> UnitState:
    """Decode a unit blob.

    The goal is validated on its own: an unreadable ``target`` drops only the
    goal, while an unreadable rest of the blob yields a fresh state.
    """
    if blob is None:
        return UnitState()
    rest = {key: value for key, value in blob.items() if key != "target"}
    try:
        record = UnitRecord.model_validate(rest)
    except ValidationError as exc:
        logger.error("Discarding unreadable memory of unit %s: %s", name, exc)
        return UnitState()
    try:
        goal = decode_goal(blob.get("target"))
    except ValidationError as exc:
        logger.error("Dropping unreadable goal of unit %s: %s", name, exc)
        goal = None
    return UnitState(
        role=record.role,
        goal=goal,
        working=record.working,
        home_room=record.home_room,
        excluded=dict(record.excluded),
    )


# -- rooms --

def encode_room(record: RoomRecord) -> dict[str, Any]:
    return record.model_dump(mode="json", by_alias=True, exclude_none=True)


def decode_room(blob: dict[str, Any] | None, name: str = "?") -> RoomRecord | None:
    """Decode a room blob; unreadable blobs read as absent so the cache rebuilds them."""
    if blob is None:
        return None
    try:
        return RoomRecord.model_validate(blob)
    except ValidationError as exc:
        logger.error("Discarding unreadable memory of room %s: %s", name, exc)
        return None
