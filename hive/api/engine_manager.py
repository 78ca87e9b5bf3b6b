"""EngineManager - owns the WorldLoop and the thread that drives it.

The loop thread is the only writer of the world and the memory store.  The
API reads the immutable Snapshot published after every tick.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import TYPE_CHECKING

from hive.core.snapshot import Snapshot
from hive.engine.world_loop import WorldLoop
from hive.utils.event_log import EventLog

if TYPE_CHECKING:
    from hive.config import SimulationConfig

logger = logging.getLogger(__name__)


class EngineState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"
    PAUSED = "paused"


class EngineManager:
    """Lifecycle of one simulation: start, pause, resume, single step, reset.

    Control calls change ``_state`` under ``_cond`` and wake the loop
    thread, which blocks on the same condition while paused.  Single steps
    are counted, so two quick ``step()`` calls run two ticks.
    """

    def __init__(self, config: SimulationConfig) -> None:
        self.config = config
        self._tick_rate: float = 0.05  # seconds between ticks while running

        self._cond = threading.Condition()
        self._state = EngineState.STOPPED
        self._pending_steps = 0
        self._thread: threading.Thread | None = None

        self._loop: WorldLoop | None = None
        self._snapshot_lock = threading.Lock()
        self._latest_snapshot: Snapshot | None = None
        self._event_log = EventLog()
        self._total_spawned = 0

        self._build()

    # -- public properties --

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is not EngineState.STOPPED

    @property
    def paused(self) -> bool:
        return self._state is EngineState.PAUSED

    @property
    def tick_rate(self) -> float:
        return self._tick_rate

    @tick_rate.setter
    def tick_rate(self, value: float) -> None:
        self._tick_rate = max(0.0, min(value, 2.0))

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def total_spawned(self) -> int:
        return self._total_spawned

    @property
    def last_tick_ms(self) -> float:
        return self._loop.last_elapsed_ms if self._loop else 0.0

    def get_snapshot(self) -> Snapshot | None:
        with self._snapshot_lock:
            return self._latest_snapshot

    # -- lifecycle --

    def start(self) -> None:
        with self._cond:
            if self._state is not EngineState.STOPPED:
                return
            self._launch(EngineState.RUNNING)
        logger.info("Engine started (tick_rate=%.3fs)", self._tick_rate)

    def pause(self) -> None:
        with self._cond:
            if self._state is EngineState.RUNNING:
                self._state = EngineState.PAUSED
        logger.info("Engine paused at tick %d", self._current_tick())

    def resume(self) -> None:
        with self._cond:
            if self._state is EngineState.PAUSED:
                self._state = EngineState.RUNNING
                self._cond.notify_all()
        logger.info("Engine resumed at tick %d", self._current_tick())

    def step(self) -> None:
        """Queue exactly one tick; the engine is paused (and started if stopped) first."""
        with self._cond:
            if self._state is EngineState.STOPPED:
                self._launch(EngineState.PAUSED)
            self._state = EngineState.PAUSED
            self._pending_steps += 1
            self._cond.notify_all()

    def stop(self) -> None:
        with self._cond:
            self._state = EngineState.STOPPED
            self._pending_steps = 0
            self._cond.notify_all()
            thread, self._thread = self._thread, None
        if thread is not None and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=5.0)
        logger.info("Engine stopped at tick %d", self._current_tick())

    def reset(self) -> None:
        """Stop, regenerate the world from the seed with empty memory, stay stopped."""
        self.stop()
        self._event_log.clear()
        self._total_spawned = 0
        self._build()
        logger.info("Engine reset.")

    # -- internals --

    def _build(self) -> None:
        self._loop = WorldLoop.build(self.config)
        with self._snapshot_lock:
            self._latest_snapshot = self._loop.create_snapshot()

    def _launch(self, state: EngineState) -> None:
        # Caller holds _cond.
        self._state = state
        self._pending_steps = 0
        self._thread = threading.Thread(target=self._run_loop, name="engine-loop", daemon=True)
        self._thread.start()

    def _wait_for_turn(self) -> bool:
        """Block until the next tick may run; False once the engine is stopped."""
        with self._cond:
            while True:
                match self._state:
                    case EngineState.STOPPED:
                        return False
                    case EngineState.RUNNING:
                        return True
                    case EngineState.PAUSED if self._pending_steps > 0:
                        self._pending_steps -= 1
                        return True
                self._cond.wait()

    def _run_loop(self) -> None:
        assert self._loop is not None
        logger.info("Engine thread started.")

        while self._wait_for_turn():
            alive = self._loop.tick_once()
            self._publish()
            if not alive:
                logger.info("Simulation ended at tick %d.", self._loop.world.tick)
                break
            with self._cond:
                if self._state is EngineState.RUNNING and self._tick_rate > 0:
                    # Woken early by pause or stop.
                    self._cond.wait(self._tick_rate)

        with self._cond:
            if self._thread is threading.current_thread():
                self._state = EngineState.STOPPED
                self._thread = None
        logger.info("Engine thread exited.")

    def _publish(self) -> None:
        assert self._loop is not None
        # Events and counters first: a reader that sees the new tick sees its events.
        events = self._loop.tick_events
        self._event_log.extend(events)
        self._total_spawned += sum(1 for e in events if e.category == "spawn")
        snap = self._loop.create_snapshot()
        with self._snapshot_lock:
            self._latest_snapshot = snap

    def _current_tick(self) -> int:
        return self._loop.world.tick if self._loop else 0
