"""Target-node selector - pick the source with the most free working positions.

A working position is any tile in the 8-neighbourhood of a source that lies
inside the room, is not a wall, and has no unit standing on it right now.
The highest count wins; ties go to the first source seen, so the choice is
stable from one call to the next for the same world.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from hive.core.enums import FindKind, Terrain
from hive.core.models import NEIGHBOR_OFFSETS, Position, Source

if TYPE_CHECKING:
    from hive.core.world_state import WorldState
    from hive.memory.room_cache import RoomCache

logger = logging.getLogger(__name__)


def node_slots(world: WorldState, node: Source) -> list[Position]:
    """All in-room positions next to *node*, diagonals included."""
    size = world.terrain(node.pos.room).size
    slots: list[Position] = []
    for dx, dy in NEIGHBOR_OFFSETS:
        x, y = node.pos.x + dx, node.pos.y + dy
        if 0 <= x < size and 0 <= y < size:
            slots.append(Position(node.pos.room, x, y))
    return slots


def free_slots(world: WorldState, node: Source, occupied: set[Position] | None = None) -> list[Position]:
    if occupied is None:
        occupied = {u.pos for u in world.units_in(node.pos.room)}
    return [
        p for p in node_slots(world, node)
        if p not in occupied and world.terrain_at(p.room, p.x, p.y) != Terrain.WALL
    ]


def free_capacity(world: WorldState, node: Source) -> int:
    return len(free_slots(world, node))


def _room_nodes(world: WorldState, room: str, cache: RoomCache | None) -> list[Source]:
    if cache is None:
        return list(world.find(room, FindKind.SOURCES))

    record = cache.get(world, room)
    nodes = [world.resolve(nid) for nid in record.sources]
    if any(not isinstance(n, Source) for n in nodes):
        logger.debug("Room %s snapshot holds stale node ids, rebuilding", room)
        record = cache.rebuild(world, room)
        nodes = [world.resolve(nid) for nid in record.sources]
    return [n for n in nodes if isinstance(n, Source)]


def best_node(
    world: WorldState,
    room: str,
    cache: RoomCache | None = None,
    exclude: Iterable[str] = (),
) -> Source | None:
    """Source in *room* with the most free adjacent positions, or None if the room has none.

    Nodes listed in *exclude* are skipped unless that would skip all of them.
    """
    nodes = _room_nodes(world, room, cache)
    excluded = set(exclude)
    if excluded:
        allowed = [n for n in nodes if n.id not in excluded]
        if allowed:
            nodes = allowed

    occupied = {u.pos for u in world.units_in(room)}
    best: Source | None = None
    best_score = -1
    for node in nodes:
        score = len(free_slots(world, node, occupied))
        if score > best_score:
            best, best_score = node, score
    return best
