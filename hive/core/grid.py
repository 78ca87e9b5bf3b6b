"""Room terrain grid."""

from __future__ import annotations

from hive.core.enums import Terrain


class RoomTerrain:
    """Square tile grid for one room, backed by a flat list for cache-friendly access."""

    __slots__ = ("name", "size", "_tiles")

    def __init__(self, name: str, size: int = 50, default: Terrain = Terrain.PLAIN) -> None:
        self.name = name
        self.size = size
        self._tiles: list[Terrain] = [default] * (size * size)

    # -- access --

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x: int, y: int) -> Terrain:
        """Out-of-bounds tiles read as walls."""
        if 0 <= x < self.size and 0 <= y < self.size:
            return self._tiles[y * self.size + x]
        return Terrain.WALL

    def set(self, x: int, y: int, terrain: Terrain) -> None:
        if self.in_bounds(x, y):
            self._tiles[y * self.size + x] = terrain

    def is_walkable(self, x: int, y: int) -> bool:
        return self.get(x, y) != Terrain.WALL

    def count(self, terrain: Terrain) -> int:
        return sum(1 for t in self._tiles if t == terrain)

    # -- copy --

    def copy(self) -> RoomTerrain:
        new = RoomTerrain.__new__(RoomTerrain)
        new.name = self.name
        new.size = self.size
        new._tiles = list(self._tiles)
        return new
