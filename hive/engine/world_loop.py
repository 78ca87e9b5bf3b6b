"""WorldLoop - the authoritative tick engine.

Phase cycle:
  1. Memory cleanup - drop records of units that no longer exist
  2. Unit steps - every owned unit runs its brain once, in name order
  3. Intent resolution - apply the tick's intents deterministically
  4. Regeneration & spawning - sources, spawn energy, new units; advance tick
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from hive.ai.brain import UnitBrain
from hive.core.enums import FindKind
from hive.core.goals import describe
from hive.core.snapshot import Snapshot
from hive.core.world_state import WorldState
from hive.engine.conflict_resolver import ConflictResolver
from hive.memory.room_cache import RoomCache
from hive.memory.store import MemoryStore
from hive.systems.generator import RoomGenerator
from hive.systems.rng import DeterministicRNG
from hive.systems.spawner import Spawner
from hive.utils.event_log import SimEvent

if TYPE_CHECKING:
    from hive.actions.base import Intent
    from hive.config import SimulationConfig

logger = logging.getLogger(__name__)


class WorldLoop:
    """The heartbeat of the simulation.

    Single-threaded mutation of WorldState and the MemoryStore.  One
    unit's failure is logged and contained; the others still run.
    """

    __slots__ = (
        "_config",
        "_world",
        "_store",
        "_cache",
        "_brain",
        "_resolver",
        "_spawner",
        "_last_applied",
        "_tick_events",
        "_last_elapsed_ms",
    )

    def __init__(
        self,
        config: SimulationConfig,
        world: WorldState,
        store: MemoryStore,
        brain: UnitBrain | None = None,
        conflict_resolver: ConflictResolver | None = None,
        spawner: Spawner | None = None,
        cache: RoomCache | None = None,
    ) -> None:
        self._config = config
        self._world = world
        self._store = store
        self._cache = cache or RoomCache(store, config.snapshot_ttl)
        self._brain = brain or UnitBrain(world, store, config, self._cache)
        self._resolver = conflict_resolver or ConflictResolver()
        self._spawner = spawner or Spawner(config, store)
        self._last_applied: list[Intent] = []
        self._tick_events: list[SimEvent] = []
        self._last_elapsed_ms: float = 0.0

    @classmethod
    def build(cls, config: SimulationConfig, store: MemoryStore | None = None) -> WorldLoop:
        """Generate the rooms from the seed and wire every component."""
        world = WorldState(config)
        RoomGenerator(config, DeterministicRNG(config.world_seed)).generate(world)
        return cls(config, world, store or MemoryStore())

    # -- properties --

    @property
    def world(self) -> WorldState:
        return self._world

    @property
    def store(self) -> MemoryStore:
        return self._store

    @property
    def cache(self) -> RoomCache:
        return self._cache

    @property
    def brain(self) -> UnitBrain:
        return self._brain

    @property
    def last_applied(self) -> list[Intent]:
        """Intents applied during the most recent tick."""
        return self._last_applied

    @property
    def tick_events(self) -> list[SimEvent]:
        """Events emitted during the most recent tick."""
        return self._tick_events

    @property
    def last_elapsed_ms(self) -> float:
        return self._last_elapsed_ms

    def _emit(self, category: str, message: str, unit_names: tuple[str, ...] = ()) -> None:
        self._tick_events.append(SimEvent(self._world.tick, category, message, unit_names))

    # -- running --

    def tick_once(self) -> bool:
        """Execute a single tick. Returns False once ``max_ticks`` is reached."""
        self._tick_events = []
        if self._world.tick >= self._config.max_ticks:
            logger.info("Tick %d: Max ticks reached.", self._world.tick)
            return False
        self._step()
        self._world.tick += 1
        return True

    def run(self) -> None:
        logger.info("=== Simulation started (seed=%d) ===", self._config.world_seed)
        while self.tick_once():
            if self._world.tick % 100 == 0:
                logger.info("Tick %d: %d units alive", self._world.tick, len(self._world.units))
        logger.info("=== Simulation finished at tick %d ===", self._world.tick)

    def create_snapshot(self) -> Snapshot:
        return Snapshot.from_world(self._world, self._store)

    # -- phases --

    def _step(self) -> None:
        tick = self._world.tick
        t0 = time.perf_counter()

        self._phase_memory()
        t1 = time.perf_counter()

        stepped = self._phase_units()
        t2 = time.perf_counter()

        self._last_applied = self._resolver.resolve(self._world.drain_intents(), self._world)
        t3 = time.perf_counter()

        self._phase_regeneration()
        self._phase_spawning()
        t4 = time.perf_counter()

        elapsed_ms = (t4 - t0) * 1000.0
        self._last_elapsed_ms = elapsed_ms
        logger.debug(
            "Tick %d: memory=%.4fs units=%.4fs resolve=%.4fs host=%.4fs total=%.2fms units=%d applied=%d",
            tick, t1 - t0, t2 - t1, t3 - t2, t4 - t3, elapsed_ms, stepped, len(self._last_applied),
        )
        if elapsed_ms > self._config.tick_budget_ms:
            logger.warning(
                "Tick %d took %.2fms, over the %.0fms budget", tick, elapsed_ms, self._config.tick_budget_ms,
            )

    def _phase_memory(self) -> None:
        for name in self._store.prune(self._world.units):
            self._emit("memory", f"Deleted memory of dead unit {name}", (name,))

    def _phase_units(self) -> int:
        count = 0
        for unit in list(self._world.my_units()):
            unit.said = None
            try:
                result = self._brain.step(unit)
            except Exception:
                logger.exception("Tick %d: unit %s failed its step", self._world.tick, unit.name)
                self._emit("error", f"Unit {unit.name} failed its step", (unit.name,))
                continue
            count += 1
            if result.changed:
                self._emit(
                    "goal",
                    f"{unit.name}: {describe(result.before)} -> {describe(result.after)}",
                    (unit.name,),
                )
        return count

    def _phase_regeneration(self) -> None:
        cfg = self._config
        for room in self._world.rooms:
            for source in self._world.find(room, FindKind.SOURCES):
                if source.ticks_to_regeneration > 0:
                    source.ticks_to_regeneration -= 1
                    if source.ticks_to_regeneration == 0:
                        source.energy = source.energy_capacity
                        logger.debug("Source %s regenerated", source.id)
            for spawn in self._world.find(room, FindKind.SPAWNS):
                if not spawn.store.is_full():
                    spawn.store.add(cfg.spawn_regen)

        for unit in self._world.units.values():
            if unit.spawning:
                unit.spawn_ticks_left -= 1
                if unit.spawn_ticks_left <= 0:
                    unit.spawning = False
                    unit.spawn_ticks_left = 0

    def _phase_spawning(self) -> None:
        for unit in self._spawner.run(self._world):
            self._emit("spawn", f"Spawning {unit.name} in {unit.room_name}", (unit.name,))
