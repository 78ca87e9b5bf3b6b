"""Engine layer: world loop and intent resolution."""

from hive.engine.conflict_resolver import ConflictResolver
from hive.engine.world_loop import WorldLoop

__all__ = ["ConflictResolver", "WorldLoop"]
