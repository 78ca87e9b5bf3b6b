"""Tests for the ConflictResolver - deterministic intent application.

Covers:
- Move collision (two units → same tile)
- Moves resolved in unit-name order
- Work applied before movement
- Terrain, obstacle and occupant rejection
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hive.actions.base import Intent
from hive.core.enums import IntentKind, ResultCode, Terrain
from hive.engine.conflict_resolver import ConflictResolver
from tests.helpers.colony import ColonyArena


def _resolve(arena: ColonyArena) -> list[Intent]:
    return ConflictResolver().resolve(arena.world.drain_intents(), arena.world)


class TestMoveConflicts:
    """Two units trying to move to the same tile."""

    def test_lower_name_wins_same_tile(self):
        arena = ColonyArena()
        b = arena.add_unit("b", 5, 3)
        a = arena.add_unit("a", 3, 3)
        target = arena.pos(4, 3)
        # Register in reverse name order; the outcome must not depend on it.
        assert arena.world.move(b, target) == ResultCode.OK
        assert arena.world.move(a, target) == ResultCode.OK

        applied = _resolve(arena)
        assert [i.unit_name for i in applied] == ["a"]
        assert a.pos == target
        assert b.pos == arena.pos(5, 3)

    def test_step_into_vacated_tile(self):
        arena = ColonyArena()
        a = arena.add_unit("a", 4, 3)
        b = arena.add_unit("b", 3, 3)
        arena.world.move(a, arena.pos(5, 3))
        arena.world.move(b, arena.pos(4, 3))
        _resolve(arena)
        assert a.pos == arena.pos(5, 3)
        assert b.pos == arena.pos(4, 3)

    def test_blocked_by_stationary_unit(self):
        arena = ColonyArena()
        a = arena.add_unit("a", 3, 3)
        arena.add_unit("b", 4, 3)
        arena.world.move(a, arena.pos(4, 3))
        assert _resolve(arena) == []
        assert a.pos == arena.pos(3, 3)

    def test_wall_rejected(self):
        arena = ColonyArena()
        a = arena.add_unit("a", 3, 3)
        arena.set_tile(4, 3, Terrain.WALL)
        arena.world.move(a, arena.pos(4, 3))
        assert _resolve(arena) == []
        assert a.pos == arena.pos(3, 3)

    def test_obstacle_rejected(self):
        arena = ColonyArena()
        a = arena.add_unit("a", 3, 3)
        arena.add_source(4, 3)
        arena.world.move(a, arena.pos(4, 3))
        assert _resolve(arena) == []

    def test_construction_site_is_walkable(self):
        arena = ColonyArena()
        a = arena.add_unit("a", 3, 3)
        arena.add_site(4, 3)
        arena.world.move(a, arena.pos(4, 3))
        _resolve(arena)
        assert a.pos == arena.pos(4, 3)

    def test_non_adjacent_move_is_invalid(self):
        arena = ColonyArena()
        a = arena.add_unit("a", 3, 3)
        assert arena.world.move(a, arena.pos(6, 3)) == ResultCode.INVALID_ARGS
        assert not arena.world.intents


class TestOrdering:
    def test_work_before_move(self):
        arena = ColonyArena()
        src = arena.add_source(5, 5)
        unit = arena.add_unit("h", 4, 5)
        arena.world.harvest(unit, src)
        arena.world.move(unit, arena.pos(3, 5))

        applied = _resolve(arena)
        assert [i.kind for i in applied] == [IntentKind.HARVEST, IntentKind.MOVE]
        assert unit.store.energy == arena.config.harvest_power
        assert unit.pos == arena.pos(3, 5)

    def test_last_registration_wins(self):
        arena = ColonyArena()
        unit = arena.add_unit("a", 3, 3)
        arena.world.move(unit, arena.pos(4, 3))
        arena.world.move(unit, arena.pos(2, 3))
        applied = _resolve(arena)
        assert len(applied) == 1
        assert unit.pos == arena.pos(2, 3)

    def test_shared_node_drains_in_name_order(self):
        arena = ColonyArena()
        src = arena.add_source(5, 5, energy=3)
        a = arena.add_unit("a", 4, 5)
        b = arena.add_unit("b", 6, 5)
        arena.world.harvest(b, src)
        arena.world.harvest(a, src)
        _resolve(arena)
        assert a.store.energy == 2
        assert b.store.energy == 1
        assert src.energy == 0
        assert src.ticks_to_regeneration == arena.config.source_regen_ticks

    def test_empty_input(self):
        arena = ColonyArena()
        assert _resolve(arena) == []
