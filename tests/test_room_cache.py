"""Tests for the RoomCache rebuild policy."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hive.memory.room_cache import RoomCache
from tests.helpers.colony import ColonyArena


def _arena() -> ColonyArena:
    arena = ColonyArena()
    arena.add_source(2, 2)
    arena.add_source(7, 7)
    arena.add_controller(5, 5)
    arena.add_mineral(8, 1)
    return arena


class TestRebuildPolicy:
    def test_absent_record_is_built(self):
        arena = _arena()
        cache = RoomCache(arena.store, ttl=100)
        assert cache.peek(arena.room) is None

        record = cache.get(arena.world, arena.room)
        assert len(record.sources) == 2
        assert record.controller is not None
        assert record.mineral.mineral_type == "H"
        assert cache.rebuilds == 1

    def test_fresh_record_is_reused(self):
        arena = _arena()
        cache = RoomCache(arena.store, ttl=100)
        cache.get(arena.world, arena.room)
        arena.world.tick = 99
        cache.get(arena.world, arena.room)
        assert cache.rebuilds == 1

    def test_expired_record_is_rebuilt(self):
        arena = _arena()
        cache = RoomCache(arena.store, ttl=100)
        cache.get(arena.world, arena.room)
        arena.world.tick = 100
        record = cache.get(arena.world, arena.room)
        assert cache.rebuilds == 2
        assert record.built_at == 100

    def test_zero_ttl_never_expires(self):
        arena = _arena()
        cache = RoomCache(arena.store, ttl=0)
        cache.get(arena.world, arena.room)
        arena.world.tick = 10_000
        cache.get(arena.world, arena.room)
        assert cache.rebuilds == 1

    def test_invalidate_forces_rebuild(self):
        arena = _arena()
        cache = RoomCache(arena.store, ttl=100)
        cache.get(arena.world, arena.room)
        cache.invalidate(arena.room)
        assert arena.store.get_room(arena.room) is None
        cache.get(arena.world, arena.room)
        assert cache.rebuilds == 2

    def test_unreadable_record_is_rebuilt(self):
        arena = _arena()
        arena.store.set_room(arena.room, {"sources": 5})
        cache = RoomCache(arena.store, ttl=100)
        record = cache.get(arena.world, arena.room)
        assert len(record.sources) == 2
        assert cache.rebuilds == 1

    def test_record_is_shared_through_the_store(self):
        arena = _arena()
        RoomCache(arena.store, ttl=100).get(arena.world, arena.room)
        other = RoomCache(arena.store, ttl=100)
        other.get(arena.world, arena.room)
        assert other.rebuilds == 0
