"""Immutable snapshot of the world and the memory store, read by the API."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

from hive.core.models import RoomObject, Unit

if TYPE_CHECKING:
    from hive.core.world_state import WorldState
    from hive.memory.store import MemoryStore


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Read-only view taken between ticks, safe to hand to another thread."""

    tick: int
    rooms: tuple[str, ...]
    units: Mapping[str, Unit]
    objects: tuple[RoomObject, ...]
    memory_units: Mapping[str, dict[str, Any]]
    memory_rooms: Mapping[str, dict[str, Any]]

    @classmethod
    def from_world(cls, world: WorldState, store: MemoryStore) -> Snapshot:
        units = {name: copy.deepcopy(u) for name, u in sorted(world.units.items())}
        objects = tuple(
            copy.deepcopy(o) for o in world.objects.values() if not isinstance(o, Unit)
        )
        return cls(
            tick=world.tick,
            rooms=tuple(world.rooms),
            units=MappingProxyType(units),
            objects=objects,
            memory_units=MappingProxyType(copy.deepcopy(store.units)),
            memory_rooms=MappingProxyType(copy.deepcopy(store.rooms)),
        )
