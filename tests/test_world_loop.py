"""Integration tests for the WorldLoop tick cycle."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from hive.ai.brain import UnitBrain
from hive.config import SimulationConfig
from hive.core.enums import Role
from hive.core.goals import Harvest, Upgrade
from hive.engine.world_loop import WorldLoop
from hive.memory.codec import decode_unit
from tests.helpers.colony import ColonyArena


class ExplodingBrain(UnitBrain):
    """Fails the step of any unit named ``bad``."""

    def step(self, unit):
        if unit.name == "bad":
            raise RuntimeError("boom")
        return super().step(unit)


class TestUnitCycle:
    def test_upgrader_harvests_then_upgrades(self):
        arena = ColonyArena()
        src = arena.add_source(2, 2)
        ctrl = arena.add_controller(2, 6)
        arena.add_unit("u", 2, 3, capacity=4)

        arena.run_ticks(1)
        assert arena.goal("u") == Harvest(src.id)
        assert arena.memory("u").working is False

        arena.run_ticks(3)
        assert arena.goal("u") == Upgrade(ctrl.id)
        assert arena.memory("u").working is True
        assert ctrl.progress == 1

        arena.run_ticks(4)
        assert ctrl.progress == 4
        assert arena.unit("u").store.energy == 0
        assert arena.goal("u") is None

    def test_goal_changes_are_reported(self):
        arena = ColonyArena()
        src = arena.add_source(2, 2)
        arena.add_unit("u", 2, 3)
        events = arena.run_ticks(1)
        goal_events = [e for e in events if e.category == "goal"]
        assert len(goal_events) == 1
        assert goal_events[0].unit_names == ("u",)
        assert f"harvest({src.id})" in goal_events[0].message

    def test_unit_without_role_adopts_default(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        arena.add_unit("x", 5, 5, role=None)
        assert arena.store.get_unit("x") is None

        arena.run_ticks(1)
        memory = arena.memory("x")
        assert memory.role == Role.UPGRADER
        assert memory.home_room == arena.room
        assert arena.store.get_unit("x")["type"] == "upgrader"

    def test_legacy_memory_is_upgraded_in_place(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        arena.add_unit("old", 5, 5, memory={"type": "builder", "homeroom": "W1N1"})
        arena.run_ticks(1)
        assert arena.store.get_unit("old")["type"] == "gatherer"

    def test_unreadable_goal_does_not_change_role(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        arena.add_spawn(7, 7, energy=100)
        arena.add_unit("g", 5, 5, memory={"type": "gatherer", "target": {"kind": "spawn", "id": "x"}})
        arena.run_ticks(1)
        assert arena.store.get_unit("g")["type"] == "gatherer"
        assert arena.memory("g").role == Role.GATHERER

    def test_foreign_units_are_not_driven(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        arena.add_unit("enemy", 5, 5, my=False, role=None)
        arena.run_ticks(2)
        assert arena.store.get_unit("enemy") is None

    def test_harvester_signals_every_tick(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        arena.add_unit("h", 5, 5, role=Role.HARVESTER)
        arena.run_ticks(2)
        assert arena.unit("h").said == "harvesting"
        assert arena.goal("h") is None


class TestFailureIsolation:
    def test_one_failing_unit_does_not_stop_others(self):
        arena = ColonyArena()
        src = arena.add_source(2, 2)
        arena.add_unit("bad", 5, 5)
        arena.add_unit("good", 2, 3)
        arena.loop = WorldLoop(
            arena.config, arena.world, arena.store,
            brain=ExplodingBrain(arena.world, arena.store, arena.config),
        )

        events = arena.run_ticks(1)
        assert arena.world.tick == 1
        assert arena.goal("good") == Harvest(src.id)
        errors = [e for e in events if e.category == "error"]
        assert [e.unit_names for e in errors] == [("bad",)]


class TestHostPhases:
    def test_memory_of_dead_unit_is_pruned(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        arena.add_unit("gone", 5, 5)
        arena.run_ticks(1)
        assert arena.store.get_unit("gone") is not None

        arena.world.remove_unit("gone")
        events = arena.run_ticks(1)
        assert arena.store.get_unit("gone") is None
        assert any(e.category == "memory" and e.unit_names == ("gone",) for e in events)

    def test_source_regenerates(self):
        arena = ColonyArena()
        src = arena.add_source(2, 2, energy=0)
        src.ticks_to_regeneration = 2
        arena.run_ticks(2)
        assert src.energy == src.energy_capacity
        assert src.ticks_to_regeneration == 0

    def test_spawn_energy_regenerates(self):
        arena = ColonyArena()
        spawn = arena.add_spawn(5, 5, energy=100)
        arena.run_ticks(3)
        assert spawn.store.energy == 100 + 3 * arena.config.spawn_regen

    def test_tick_stops_at_max_ticks(self):
        arena = ColonyArena(max_ticks=3)
        arena.run_ticks(5)
        assert arena.world.tick == 3
        assert arena.loop.tick_once() is False

    def test_intents_do_not_leak_between_ticks(self):
        arena = ColonyArena()
        arena.add_source(2, 2)
        arena.add_unit("u", 7, 7)
        arena.run_ticks(1)
        assert not arena.world.intents


class TestFullRun:
    def test_generated_world_runs(self):
        config = SimulationConfig(max_ticks=120, world_seed=3, tick_budget_ms=10_000.0)
        loop = WorldLoop.build(config)
        loop.run()

        assert loop.world.tick == 120
        assert 1 <= len(loop.world.units) <= config.max_units
        for name in loop.world.units:
            memory = decode_unit(loop.store.get_unit(name), name)
            assert memory.role == Role.UPGRADER
            assert memory.home_room == "W1N1"
        assert loop.store.get_room("W1N1") is not None

    def test_same_seed_same_history(self):
        def run():
            loop = WorldLoop.build(SimulationConfig(max_ticks=60, world_seed=11, tick_budget_ms=10_000.0))
            loop.run()
            return (
                sorted((u.name, u.pos, u.store.energy) for u in loop.world.units.values()),
                loop.store.dumps(),
            )

        assert run() == run()
