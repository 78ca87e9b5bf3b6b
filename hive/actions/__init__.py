"""Action system: intents, validation, and application."""

from hive.actions.base import Intent
from hive.actions.move import MoveAction
from hive.actions.work import BuildAction, HarvestAction, TransferAction, UpgradeAction

__all__ = ["BuildAction", "HarvestAction", "Intent", "MoveAction", "TransferAction", "UpgradeAction"]
