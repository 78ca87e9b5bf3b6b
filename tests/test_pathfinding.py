"""Unit tests for the A* pathfinder and its cost overlay."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hive.ai.pathfinding import BLOCKED, CostMatrix, Pathfinder
from hive.core.enums import Terrain
from hive.core.grid import RoomTerrain
from hive.core.models import Position

ROOM = "W1N1"


def _terrain(size: int = 10) -> RoomTerrain:
    return RoomTerrain(ROOM, size)


def _p(x: int, y: int) -> Position:
    return Position(ROOM, x, y)


# ---------------------------------------------------------------------------
# Basic search
# ---------------------------------------------------------------------------

class TestSearchBasic:
    def test_straight_line_path(self):
        pf = Pathfinder(_terrain())
        result = pf.search(_p(0, 0), _p(4, 0))
        assert not result.incomplete
        assert len(result.path) == 4
        assert result.path[-1] == _p(4, 0)

    def test_diagonal_steps_count_once(self):
        pf = Pathfinder(_terrain())
        result = pf.search(_p(0, 0), _p(5, 5))
        assert len(result.path) == 5
        assert result.cost == 5

    def test_start_already_in_range(self):
        pf = Pathfinder(_terrain())
        result = pf.search(_p(3, 3), _p(4, 4), range_=1)
        assert result.path == []
        assert not result.incomplete

    def test_range_one_stops_adjacent(self):
        pf = Pathfinder(_terrain())
        result = pf.search(_p(0, 0), _p(5, 0), range_=1)
        assert not result.incomplete
        assert result.path[-1].range_to(_p(5, 0)) == 1
        assert len(result.path) == 4

    def test_path_excludes_start(self):
        pf = Pathfinder(_terrain())
        result = pf.search(_p(2, 2), _p(3, 2))
        assert result.path == [_p(3, 2)]


# ---------------------------------------------------------------------------
# Terrain costs
# ---------------------------------------------------------------------------

class TestTerrain:
    def test_path_around_wall(self):
        t = _terrain()
        for y in range(5):
            t.set(3, y, Terrain.WALL)
        pf = Pathfinder(t)
        result = pf.search(_p(2, 2), _p(4, 2))
        assert not result.incomplete
        assert result.path[-1] == _p(4, 2)
        for step in result.path:
            assert t.is_walkable(step.x, step.y), f"Step {step} is on a wall"

    def test_no_path_through_walls(self):
        t = _terrain()
        for y in range(10):
            t.set(5, y, Terrain.WALL)
        pf = Pathfinder(t)
        result = pf.search(_p(1, 1), _p(8, 8))
        assert result.incomplete
        assert result.path == []

    def test_swamp_is_avoided_when_cheaper_around(self):
        t = _terrain()
        t.set(2, 1, Terrain.SWAMP)
        pf = Pathfinder(t, plain_cost=1, swamp_cost=5)
        result = pf.search(_p(1, 1), _p(3, 1))
        assert _p(2, 1) not in result.path
        assert result.cost == 2

    def test_swamp_crossed_when_only_route(self):
        t = _terrain()
        for y in range(10):
            t.set(4, y, Terrain.WALL)
        t.set(4, 5, Terrain.SWAMP)
        pf = Pathfinder(t, plain_cost=1, swamp_cost=5)
        result = pf.search(_p(3, 5), _p(5, 5))
        assert result.path == [_p(4, 5), _p(5, 5)]
        assert result.cost == 6


# ---------------------------------------------------------------------------
# Cost overlay and limits
# ---------------------------------------------------------------------------

class TestOverlay:
    def test_blocked_tile_is_not_entered(self):
        matrix = CostMatrix()
        matrix.set(2, 1, BLOCKED)
        pf = Pathfinder(_terrain())
        result = pf.search(_p(1, 1), _p(3, 1), matrix=matrix)
        assert not result.incomplete
        assert _p(2, 1) not in result.path

    def test_overlay_cost_replaces_terrain_cost(self):
        matrix = CostMatrix()
        matrix.set(2, 2, 10)
        pf = Pathfinder(_terrain())
        assert pf.tile_cost(2, 2, matrix) == 10
        assert pf.tile_cost(3, 3, matrix) == 1

    def test_matrix_clamps_values(self):
        matrix = CostMatrix()
        matrix.set(0, 0, 1000)
        matrix.set(1, 1, -4)
        assert matrix.get(0, 0) == BLOCKED
        assert matrix.get(1, 1) == 0
        assert len(matrix) == 2

    def test_max_ops_exhausted_is_incomplete(self):
        pf = Pathfinder(_terrain(), max_ops=1)
        result = pf.search(_p(0, 0), _p(9, 9))
        assert result.incomplete
        assert result.ops == 1

    def test_other_room_is_incomplete(self):
        pf = Pathfinder(_terrain())
        result = pf.search(_p(0, 0), Position("W2N1", 3, 3))
        assert result.incomplete
