"""In-process key-value memory store holding the persisted blobs.

Stands in for the host's memory root: ``units[name]`` and ``rooms[name]``
hold plain JSON-compatible dicts, nothing else.  The codec decides what
goes inside them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

logger = logging.getLogger(__name__)


class MemoryStore:
    """Versionless blob store keyed by unit name and room name."""

    __slots__ = ("units", "rooms")

    def __init__(
        self,
        units: dict[str, dict[str, Any]] | None = None,
        rooms: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self.units: dict[str, dict[str, Any]] = units if units is not None else {}
        self.rooms: dict[str, dict[str, Any]] = rooms if rooms is not None else {}

    # -- units --

    def get_unit(self, name: str) -> dict[str, Any] | None:
        return self.units.get(name)

    def set_unit(self, name: str, blob: dict[str, Any]) -> None:
        self.units[name] = blob

    def delete_unit(self, name: str) -> None:
        self.units.pop(name, None)

    def prune(self, alive: Iterable[str]) -> list[str]:
        """Drop records of units that are no longer in the world; return their names."""
        alive_names = set(alive)
        dead = [name for name in self.units if name not in alive_names]
        for name in dead:
            logger.info("Deleting memory for dead unit %s", name)
            del self.units[name]
        return dead

    # -- rooms --

    def get_room(self, name: str) -> dict[str, Any] | None:
        return self.rooms.get(name)

    def set_room(self, name: str, blob: dict[str, Any]) -> None:
        self.rooms[name] = blob

    def delete_room(self, name: str) -> None:
        self.rooms.pop(name, None)

    # -- persistence --

    def to_dict(self) -> dict[str, Any]:
        return {"units": self.units, "rooms": self.rooms}

    def dumps(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def loads(cls, raw: str) -> MemoryStore:
        data = json.loads(raw) if raw else {}
        return cls(units=dict(data.get("units") or {}), rooms=dict(data.get("rooms") or {}))

    def save(self, path: str | Path) -> None:
        Path(path).write_text(self.dumps(), encoding="utf-8")
        logger.info("Memory written to %s (%d units, %d rooms)", path, len(self.units), len(self.rooms))

    @classmethod
    def load(cls, path: str | Path) -> MemoryStore:
        p = Path(path)
        if not p.exists():
            return cls()
        return cls.loads(p.read_text(encoding="utf-8"))
