"""Goal - the persisted task a unit works on, as a closed tagged union.

Every variant carries only the stable id of its target.  Live objects are
resolved through the world each tick and never stored, because they go
stale between ticks.  "No active goal" is plain ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class Upgrade:
    """Contribute stored energy to the room controller."""

    controller_id: str


@dataclass(frozen=True, slots=True)
class Harvest:
    """Stand next to a source and extract energy into the store."""

    node_id: str


@dataclass(frozen=True, slots=True)
class Deliver:
    """Transfer stored energy into a spawn."""

    spawn_id: str


@dataclass(frozen=True, slots=True)
class Build:
    """Contribute stored energy to a construction site."""

    site_id: str


Goal = Union[Upgrade, Harvest, Deliver, Build]


def target_id(goal: Goal) -> str:
    """Return the id a goal refers to."""
    match goal:
        case Upgrade(controller_id=ref):
            return ref
        case Harvest(node_id=ref):
            return ref
        case Deliver(spawn_id=ref):
            return ref
        case Build(site_id=ref):
            return ref
    raise TypeError(f"not a goal: {goal!r}")


def describe(goal: Goal | None) -> str:
    """Short human-readable label used in logs and the event feed."""
    if goal is None:
        return "none"
    return f"{type(goal).__name__.lower()}({target_id(goal)})"
