"""Intent - what a unit asked the world to do this tick."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from hive.core.enums import IntentKind


@dataclass(frozen=True, slots=True)
class Intent:
    """An action request registered by an action primitive.

    The primitive has already validated it against the world as it stood
    when called; the ConflictResolver re-validates and applies it once
    every unit has run.
    """

    unit_name: str
    kind: IntentKind
    target: Any = None
    amount: int = 0

    def __repr__(self) -> str:
        return f"Intent(unit={self.unit_name}, {self.kind.name}, target={self.target}, amount={self.amount})"
