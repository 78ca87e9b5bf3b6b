"""Deterministic application of the intents registered during a tick."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hive.actions.base import Intent
from hive.actions.move import MoveAction
from hive.actions.work import BuildAction, HarvestAction, TransferAction, UpgradeAction
from hive.core.enums import IntentKind

if TYPE_CHECKING:
    from hive.core.models import Position
    from hive.core.world_state import WorldState

logger = logging.getLogger(__name__)


class ConflictResolver:
    """Sorts and applies intents in a fixed order.

    Resolution policies:
    - Work (harvest, transfer, build, upgrade) before movement, so a unit
      works from the tile it stood on when it decided.
    - Within a kind, lowest unit name first.  Two units stepping onto the
      same free tile: the lower name gets it, the other stays put.
    """

    __slots__ = ()

    def resolve(self, intents: list[Intent], world: WorldState) -> list[Intent]:
        """Apply *intents*. Returns the list of *applied* intents."""
        if not intents:
            return []

        applied: list[Intent] = []
        occupied = self._build_occupied_set(world)

        for intent in self._sort(intents):
            if self._apply_one(intent, world, occupied):
                applied.append(intent)

        return applied

    # -- internals --

    @staticmethod
    def _sort(intents: list[Intent]) -> list[Intent]:
        return sorted(intents, key=lambda i: (i.kind.value, i.unit_name))

    @staticmethod
    def _build_occupied_set(world: WorldState) -> set[Position]:
        return {u.pos for u in world.units.values()}

    @staticmethod
    def _apply_one(intent: Intent, world: WorldState, occupied: set[Position]) -> bool:
        match intent.kind:
            case IntentKind.HARVEST:
                ok = HarvestAction.apply(intent, world)
            case IntentKind.TRANSFER:
                ok = TransferAction.apply(intent, world)
            case IntentKind.BUILD:
                ok = BuildAction.apply(intent, world)
            case IntentKind.UPGRADE:
                ok = UpgradeAction.apply(intent, world)
            case IntentKind.MOVE:
                ok = MoveAction.apply(intent, world, occupied)
            case _:
                ok = False

        if not ok:
            logger.debug("Rejected: %r", intent)
        return ok
