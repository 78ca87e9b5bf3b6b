"""Persisted unit and room memory: schemas, codec, store and room cache."""

from hive.memory.codec import UnitState, decode_unit, encode_unit
from hive.memory.room_cache import RoomCache
from hive.memory.store import MemoryStore

__all__ = ["MemoryStore", "RoomCache", "UnitState", "decode_unit", "encode_unit"]
