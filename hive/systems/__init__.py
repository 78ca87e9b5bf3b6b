"""Host systems: RNG, room generation, spawning."""

from hive.systems.rng import DeterministicRNG
from hive.systems.generator import RoomGenerator
from hive.systems.spawner import Spawner, count_alive

__all__ = ["DeterministicRNG", "RoomGenerator", "Spawner", "count_alive"]
