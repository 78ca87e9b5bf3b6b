"""Tests for the per-role goal assignment policy."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hive.ai.roles import RolePolicy
from hive.core.enums import Role
from hive.core.goals import Build, Harvest, Upgrade
from hive.memory.codec import UnitState
from tests.helpers.colony import ColonyArena


def _assign(arena: ColonyArena, unit, role: Role | None, **memory):
    return RolePolicy(arena.world).assign(unit, UnitState(role=role, **memory))


class TestGatherer:
    def test_carrying_energy_builds_first_site(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        first = arena.add_site(6, 6)
        arena.add_site(7, 7)
        unit = arena.add_unit("g", 4, 4, energy=50, role=Role.GATHERER)
        assert _assign(arena, unit, Role.GATHERER) == Build(first.id)

    def test_partial_store_counts_as_full(self):
        arena = ColonyArena()
        site = arena.add_site(6, 6)
        unit = arena.add_unit("g", 4, 4, energy=10, role=Role.GATHERER)
        assert _assign(arena, unit, Role.GATHERER) == Build(site.id)

    def test_carrying_energy_without_sites_harvests(self):
        arena = ColonyArena()
        src = arena.add_source(2, 2)
        unit = arena.add_unit("g", 4, 4, energy=50, role=Role.GATHERER)
        assert _assign(arena, unit, Role.GATHERER) == Harvest(src.id)

    def test_empty_store_harvests(self):
        arena = ColonyArena()
        src = arena.add_source(2, 2)
        arena.add_site(6, 6)
        unit = arena.add_unit("g", 4, 4, role=Role.GATHERER)
        assert _assign(arena, unit, Role.GATHERER) == Harvest(src.id)


class TestUpgrader:
    def test_full_store_upgrades(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        ctrl = arena.add_controller(8, 8)
        unit = arena.add_unit("u", 4, 4, energy=50)
        assert _assign(arena, unit, Role.UPGRADER) == Upgrade(ctrl.id)

    def test_full_store_without_controller_waits(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        unit = arena.add_unit("u", 4, 4, energy=50)
        assert _assign(arena, unit, Role.UPGRADER) is None

    def test_partial_store_keeps_harvesting(self):
        arena = ColonyArena()
        src = arena.add_source(2, 2)
        arena.add_controller(8, 8)
        unit = arena.add_unit("u", 4, 4, energy=20)
        assert _assign(arena, unit, Role.UPGRADER) == Harvest(src.id)

    def test_no_nodes_waits(self):
        arena = ColonyArena()
        arena.add_controller(8, 8)
        unit = arena.add_unit("u", 4, 4)
        assert _assign(arena, unit, Role.UPGRADER) is None

    def test_excluded_node_is_avoided(self):
        arena = ColonyArena()
        first = arena.add_source(2, 2)
        second = arena.add_source(7, 7)
        unit = arena.add_unit("u", 4, 4)
        arena.world.tick = 3
        goal = _assign(arena, unit, Role.UPGRADER, excluded={first.id: 5})
        assert goal == Harvest(second.id)

    def test_expired_exclusion_is_ignored(self):
        arena = ColonyArena()
        first = arena.add_source(2, 2)
        arena.add_source(7, 7)
        unit = arena.add_unit("u", 4, 4)
        arena.world.tick = 5
        goal = _assign(arena, unit, Role.UPGRADER, excluded={first.id: 5})
        assert goal == Harvest(first.id)


class TestOtherRoles:
    def test_harvester_only_signals(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        unit = arena.add_unit("h", 4, 4, role=Role.HARVESTER)
        assert _assign(arena, unit, Role.HARVESTER) is None
        assert unit.said == "harvesting"
        assert not arena.world.intents

    def test_missing_role_assigns_nothing(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        unit = arena.add_unit("x", 4, 4, role=None)
        assert _assign(arena, unit, None) is None
