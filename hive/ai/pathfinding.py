"""A* pathfinding with terrain costs and a per-search cost overlay.

Provides a ``CostMatrix`` overlay and a ``Pathfinder`` that searches one room
for a route ending within a range of the goal.

Usage:
    pf = Pathfinder(terrain, plain_cost=1, swamp_cost=5)
    result = pf.search(start, goal, range_=1, matrix=overlay)
    if not result.incomplete:
        first_step = result.path[0]
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hive.core.enums import Terrain
from hive.core.models import NEIGHBOR_OFFSETS, Position

if TYPE_CHECKING:
    from hive.core.grid import RoomTerrain

# Overlay value meaning "do not enter during this search".
BLOCKED = 255


class CostMatrix:
    """Sparse per-room cost overlay.  0 means "use the terrain cost"."""

    __slots__ = ("_costs",)

    def __init__(self) -> None:
        self._costs: dict[tuple[int, int], int] = {}

    def set(self, x: int, y: int, cost: int) -> None:
        self._costs[(x, y)] = max(0, min(BLOCKED, cost))

    def get(self, x: int, y: int) -> int:
        return self._costs.get((x, y), 0)

    def __len__(self) -> int:
        return len(self._costs)


@dataclass(slots=True)
class SearchResult:
    """Path excludes the start tile; ``incomplete`` means the goal range was never reached."""

    path: list[Position] = field(default_factory=list)
    ops: int = 0
    cost: int = 0
    incomplete: bool = False


class Pathfinder:
    """A* over one room's terrain, 8-directional, bounded by ``max_ops`` expansions."""

    __slots__ = ("_terrain", "_plain", "_swamp", "_max_ops")

    def __init__(
        self,
        terrain: RoomTerrain,
        plain_cost: int = 1,
        swamp_cost: int = 5,
        max_ops: int = 2000,
    ) -> None:
        self._terrain = terrain
        self._plain = plain_cost
        self._swamp = swamp_cost
        self._max_ops = max_ops

    def tile_cost(self, x: int, y: int, matrix: CostMatrix | None) -> int | None:
        """Cost of stepping onto (x, y), or None if it cannot be entered."""
        if matrix is not None:
            overlay = matrix.get(x, y)
            if overlay >= BLOCKED:
                return None
            if overlay > 0:
                return overlay
        t = self._terrain.get(x, y)
        if t == Terrain.WALL:
            return None
        return self._swamp if t == Terrain.SWAMP else self._plain

    def search(
        self,
        start: Position,
        goal: Position,
        range_: int = 0,
        matrix: CostMatrix | None = None,
    ) -> SearchResult:
        """Cheapest route from *start* to any tile within *range_* of *goal*."""
        room = self._terrain.name
        if start.room != room or goal.room != room:
            return SearchResult(incomplete=True)

        def in_range(x: int, y: int) -> bool:
            return max(abs(x - goal.x), abs(y - goal.y)) <= range_

        if in_range(start.x, start.y):
            return SearchResult()

        # Admissible as long as the cheapest step costs at least 1.
        def h(x: int, y: int) -> int:
            return max(max(abs(x - goal.x), abs(y - goal.y)) - range_, 0)

        counter = 0
        open_heap: list[tuple[int, int, int, int]] = [(h(start.x, start.y), counter, start.x, start.y)]
        g_score: dict[tuple[int, int], int] = {(start.x, start.y): 0}
        came_from: dict[tuple[int, int], tuple[int, int]] = {}
        closed: set[tuple[int, int]] = set()
        ops = 0

        while open_heap and ops < self._max_ops:
            _, _, cx, cy = heapq.heappop(open_heap)
            ckey = (cx, cy)
            if ckey in closed:
                continue
            if in_range(cx, cy):
                return SearchResult(
                    path=self._reconstruct(came_from, ckey, room),
                    ops=ops,
                    cost=g_score[ckey],
                )
            closed.add(ckey)
            ops += 1

            current_g = g_score[ckey]
            for dx, dy in NEIGHBOR_OFFSETS:
                nx, ny = cx + dx, cy + dy
                nkey = (nx, ny)
                if nkey in closed or not self._terrain.in_bounds(nx, ny):
                    continue
                step = self.tile_cost(nx, ny, matrix)
                if step is None:
                    continue
                tentative = current_g + step
                if tentative < g_score.get(nkey, 1 << 30):
                    g_score[nkey] = tentative
                    came_from[nkey] = ckey
                    counter += 1
                    heapq.heappush(open_heap, (tentative + h(nx, ny), counter, nx, ny))

        return SearchResult(ops=ops, incomplete=True)

    @staticmethod
    def _reconstruct(
        came_from: dict[tuple[int, int], tuple[int, int]],
        current: tuple[int, int],
        room: str,
    ) -> list[Position]:
        """Walk back through came_from to build the path."""
        path: list[Position] = []
        while current in came_from:
            path.append(Position(room, current[0], current[1]))
            current = came_from[current]
        path.reverse()
        return path
