"""Core data models: Position, Store, and the room objects units interact with."""

from __future__ import annotations

from dataclasses import dataclass, field

# (dx, dy) for the 8-neighbourhood, row by row
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable tile coordinate inside a named room."""

    room: str
    x: int
    y: int

    def range_to(self, other: Position) -> int:
        """Chebyshev distance, or a huge value across rooms."""
        if self.room != other.room:
            return 1 << 30
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def is_near_to(self, other: Position) -> bool:
        return self.range_to(other) <= 1

    def offset(self, dx: int, dy: int) -> Position:
        return Position(self.room, self.x + dx, self.y + dy)

    def __repr__(self) -> str:
        return f"[{self.room} {self.x},{self.y}]"


@dataclass(slots=True)
class Store:
    """Capacity-limited energy store."""

    capacity: int
    energy: int = 0

    @property
    def free_capacity(self) -> int:
        return max(0, self.capacity - self.energy)

    def is_full(self) -> bool:
        return self.free_capacity == 0

    def is_empty(self) -> bool:
        return self.energy == 0

    def add(self, amount: int) -> int:
        """Add up to *amount*; return what was actually stored."""
        stored = min(amount, self.free_capacity)
        self.energy += stored
        return stored

    def remove(self, amount: int) -> int:
        """Remove up to *amount*; return what was actually taken."""
        taken = min(amount, self.energy)
        self.energy -= taken
        return taken


@dataclass(slots=True)
class RoomObject:
    """Anything with a stable id and a position."""

    id: str
    pos: Position


@dataclass(slots=True)
class Source(RoomObject):
    """Fixed energy node shared by every unit that can stand next to it."""

    energy: int = 3000
    energy_capacity: int = 3000
    ticks_to_regeneration: int = 0


@dataclass(slots=True)
class Controller(RoomObject):
    level: int = 1
    progress: int = 0
    my: bool = True


@dataclass(slots=True)
class Spawn(RoomObject):
    name: str = "Spawn1"
    store: Store = field(default_factory=lambda: Store(300, 300))
    my: bool = True


@dataclass(slots=True)
class ConstructionSite(RoomObject):
    structure_type: str = "road"
    progress: int = 0
    progress_total: int = 100
    my: bool = True

    @property
    def remaining(self) -> int:
        return max(0, self.progress_total - self.progress)


@dataclass(slots=True)
class Structure(RoomObject):
    """A finished construction site."""

    structure_type: str = "road"


@dataclass(slots=True)
class Mineral(RoomObject):
    mineral_type: str = "H"
    density: int = 1


@dataclass(slots=True)
class Unit(RoomObject):
    """A player-controlled mobile agent.

    The unit itself holds only live state; its task memory lives in the
    ``MemoryStore`` under ``name``.
    """

    name: str = ""
    store: Store = field(default_factory=lambda: Store(50))
    my: bool = True
    spawning: bool = False
    spawn_ticks_left: int = 0
    said: str | None = None

    def is_full(self) -> bool:
        return self.store.is_full()

    def is_empty(self) -> bool:
        return self.store.is_empty()

    @property
    def room_name(self) -> str:
        return self.pos.room
