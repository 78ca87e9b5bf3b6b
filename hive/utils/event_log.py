"""Recent simulation events, grouped by tick, for the API event feed."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, slots=True)
class SimEvent:
    tick: int
    category: str                       # "goal", "spawn", "memory", "error"
    message: str
    unit_names: tuple[str, ...] = ()


class EventLog:
    """Per-tick batches of events; only the last ``keep_ticks`` ticks are kept.

    The tick loop is the only writer.  Readers copy under the lock, so
    they never see a half-written batch.
    """

    __slots__ = ("_batches", "_lock")

    def __init__(self, keep_ticks: int = 2000) -> None:
        self._batches: deque[tuple[int, list[SimEvent]]] = deque(maxlen=keep_ticks)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return sum(len(batch) for _, batch in self._batches)

    def append(self, event: SimEvent) -> None:
        self.extend((event,))

    def extend(self, events: Iterable[SimEvent]) -> None:
        with self._lock:
            for event in events:
                if self._batches and self._batches[-1][0] == event.tick:
                    self._batches[-1][1].append(event)
                else:
                    self._batches.append((event.tick, [event]))

    def since_tick(self, tick: int, categories: Iterable[str] | None = None) -> list[SimEvent]:
        """Events with ``tick >= tick``, oldest first, optionally of some categories only."""
        wanted = set(categories) if categories is not None else None
        found: list[list[SimEvent]] = []
        with self._lock:
            for batch_tick, batch in reversed(self._batches):
                if batch_tick < tick:
                    break
                found.append(list(batch))
        return [
            e for batch in reversed(found) for e in batch
            if wanted is None or e.category in wanted
        ]

    def for_unit(self, name: str) -> list[SimEvent]:
        with self._lock:
            return [e for _, batch in self._batches for e in batch if name in e.unit_names]

    def latest(self, count: int = 50) -> list[SimEvent]:
        if count <= 0:
            return []
        with self._lock:
            flat = [e for _, batch in self._batches for e in batch]
        return flat[-count:]

    def clear(self) -> None:
        with self._lock:
            self._batches.clear()
