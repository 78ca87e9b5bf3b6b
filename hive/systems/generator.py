"""Room generator - deterministic room layouts from the world seed."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hive.core.enums import Domain, Terrain
from hive.core.grid import RoomTerrain
from hive.core.models import (
    NEIGHBOR_OFFSETS,
    ConstructionSite,
    Controller,
    Mineral,
    Position,
    Source,
    Spawn,
    Store,
)

if TYPE_CHECKING:
    from hive.config import SimulationConfig
    from hive.core.world_state import WorldState
    from hive.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

MINERAL_TYPES = ("H", "O", "U", "L", "K", "Z", "X")
SITE_TYPES = ("extension", "road", "container")

# Tiles kept clear along the room edge so exits stay open.
_EDGE = 2


def room_name(index: int) -> str:
    """Rooms are laid out west to east along the first north row: W1N1, W2N1, ..."""
    return f"W{index + 1}N1"


class RoomGenerator:
    """Builds rooms (terrain plus static objects) into a WorldState."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: SimulationConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def generate(self, world: WorldState) -> list[str]:
        """Generate ``num_rooms`` rooms. Returns the room names in order."""
        names = []
        for index in range(self._config.num_rooms):
            names.append(self.generate_room(world, index))
        return names

    def generate_room(self, world: WorldState, index: int) -> str:
        cfg = self._config
        name = room_name(index)
        terrain = self._terrain(name, index)
        world.add_room(terrain)

        taken: set[tuple[int, int]] = set()
        center = cfg.room_size // 2

        spawn_pos = self._place(terrain, index, 0, taken, near=(center, center))
        world.add_object(Spawn(
            id=world.allocate_id(), pos=spawn_pos, name=f"Spawn{index + 1}",
            store=Store(cfg.spawn_capacity, cfg.spawn_capacity),
        ))

        controller_pos = self._place(terrain, index, 1, taken)
        world.add_object(Controller(id=world.allocate_id(), pos=controller_pos))

        for n in range(cfg.sources_per_room):
            pos = self._place(terrain, index, 10 + n, taken)
            world.add_object(Source(
                id=world.allocate_id(), pos=pos,
                energy=cfg.source_energy, energy_capacity=cfg.source_energy,
            ))

        mineral_pos = self._place(terrain, index, 2, taken)
        mtype = self._rng.choice(Domain.PLACEMENT, index, 9999, MINERAL_TYPES)
        world.add_object(Mineral(id=world.allocate_id(), pos=mineral_pos, mineral_type=mtype))

        for n in range(cfg.sites_per_room):
            pos = self._place(terrain, index, 20 + n, taken, near=(spawn_pos.x, spawn_pos.y), spread=6)
            world.add_object(ConstructionSite(
                id=world.allocate_id(), pos=pos,
                structure_type=SITE_TYPES[n % len(SITE_TYPES)],
                progress_total=cfg.site_progress_total,
            ))

        logger.info(
            "Generated room %s: %d walls, %d swamps, %d sources, %d sites",
            name, terrain.count(Terrain.WALL), terrain.count(Terrain.SWAMP),
            cfg.sources_per_room, cfg.sites_per_room,
        )
        return name

    # -- internals --

    def _terrain(self, name: str, index: int) -> RoomTerrain:
        cfg = self._config
        size = cfg.room_size
        terrain = RoomTerrain(name, size)
        for y in range(size):
            for x in range(size):
                if x < _EDGE or y < _EDGE or x >= size - _EDGE or y >= size - _EDGE:
                    terrain.set(x, y, Terrain.WALL)
                    continue
                salt = y * size + x
                if self._rng.next_bool(Domain.MAP_GEN, index, salt, cfg.wall_density):
                    terrain.set(x, y, Terrain.WALL)
                elif self._rng.next_bool(Domain.MAP_GEN, index, salt + size * size, cfg.swamp_density):
                    terrain.set(x, y, Terrain.SWAMP)
        return terrain

    def _place(
        self,
        terrain: RoomTerrain,
        index: int,
        key: int,
        taken: set[tuple[int, int]],
        near: tuple[int, int] | None = None,
        spread: int = 3,
    ) -> Position:
        """Pick a free interior tile, clear the walls around it, and claim it."""
        size = terrain.size
        low, high = _EDGE + 1, size - _EDGE - 2
        rkey = index * 1000 + key
        x = y = low
        for attempt in range(200):
            if near is not None:
                x = near[0] + self._rng.next_int(Domain.PLACEMENT, rkey, attempt * 2, -spread, spread)
                y = near[1] + self._rng.next_int(Domain.PLACEMENT, rkey, attempt * 2 + 1, -spread, spread)
            else:
                x = self._rng.next_int(Domain.PLACEMENT, rkey, attempt * 2, low, high)
                y = self._rng.next_int(Domain.PLACEMENT, rkey, attempt * 2 + 1, low, high)
            if not (low <= x <= high and low <= y <= high):
                continue
            if any((x + dx, y + dy) in taken for dx, dy in NEIGHBOR_OFFSETS) or (x, y) in taken:
                continue
            break
        else:
            logger.warning("Room %s: no free tile for object #%d, placing at %d,%d", terrain.name, key, x, y)

        # Objects sit on plain ground with an open ring around them.
        terrain.set(x, y, Terrain.PLAIN)
        for dx, dy in NEIGHBOR_OFFSETS:
            if terrain.in_bounds(x + dx, y + dy) and terrain.get(x + dx, y + dy) == Terrain.WALL:
                terrain.set(x + dx, y + dy, Terrain.PLAIN)
        taken.add((x, y))
        return Position(terrain.name, x, y)
