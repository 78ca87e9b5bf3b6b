"""RoomCache - explicit, lazily rebuilt per-room snapshot of node ids.

Policy: a room's record is rebuilt when it is absent, unreadable, or older
than ``ttl`` ticks.  Callers that find a cached id no longer resolving call
``rebuild`` directly.  Writes go straight to the MemoryStore, so a rebuild
by one unit's step is what every later step in the same tick reads.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hive.core.enums import FindKind
from hive.memory.codec import decode_room, encode_room
from hive.memory.schemas import MineralRecord, RoomRecord

if TYPE_CHECKING:
    from hive.core.world_state import WorldState
    from hive.memory.store import MemoryStore

logger = logging.getLogger(__name__)


class RoomCache:
    __slots__ = ("_store", "_ttl", "rebuilds")

    def __init__(self, store: MemoryStore, ttl: int = 100) -> None:
        self._store = store
        self._ttl = ttl
        self.rebuilds = 0

    def is_stale(self, record: RoomRecord, tick: int) -> bool:
        if self._ttl <= 0:
            return False
        return tick - record.built_at >= self._ttl

    def peek(self, room: str) -> RoomRecord | None:
        """Cached record as stored, without any rebuild."""
        return decode_room(self._store.get_room(room), room)

    def get(self, world: WorldState, room: str) -> RoomRecord:
        record = self.peek(room)
        if record is None or self.is_stale(record, world.tick):
            record = self.rebuild(world, room)
        return record

    def rebuild(self, world: WorldState, room: str) -> RoomRecord:
        sources = [s.id for s in world.find(room, FindKind.SOURCES)]
        controller = world.controller(room)
        mineral = None
        for m in world.find(room, FindKind.MINERALS):
            mineral = MineralRecord(id=m.id, mineral_type=m.mineral_type, density=m.density)
            break
        record = RoomRecord(
            sources=sources,
            controller=controller.id if controller else None,
            mineral=mineral,
            built_at=world.tick,
        )
        self._store.set_room(room, encode_room(record))
        self.rebuilds += 1
        logger.debug("Room %s snapshot rebuilt at tick %d (%d sources)", room, world.tick, len(sources))
        return record

    def invalidate(self, room: str) -> None:
        self._store.delete_room(room)
