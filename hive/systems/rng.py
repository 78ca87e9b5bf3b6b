"""Seeded, stateless randomness for world generation.

Every draw is ``xxh64(domain, key, salt; seed)`` mapped onto the wanted
range, so a draw never depends on how many draws came before it.  Rooms
generated from the same seed are therefore identical whatever order they
are built in.
"""

from __future__ import annotations

import struct
from typing import Sequence, TypeVar

import xxhash

from hive.core.enums import Domain

T = TypeVar("T")

_PACK = struct.Struct("<iqq")
_SPAN = float(1 << 64)


class DeterministicRNG:
    __slots__ = ("_seed",)

    def __init__(self, seed: int) -> None:
        # xxh64 takes an unsigned 64-bit seed.
        self._seed = seed & 0xFFFF_FFFF_FFFF_FFFF

    @property
    def seed(self) -> int:
        return self._seed

    def raw(self, domain: Domain, key: int, salt: int) -> int:
        return xxhash.xxh64_intdigest(_PACK.pack(domain.value, key, salt), seed=self._seed)

    def next_float(self, domain: Domain, key: int, salt: int) -> float:
        """Uniform in [0.0, 1.0)."""
        return self.raw(domain, key, salt) / _SPAN

    def next_int(self, domain: Domain, key: int, salt: int, low: int, high: int) -> int:
        """Uniform in [low, high], both ends included."""
        return low + int(self.next_float(domain, key, salt) * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, salt: int, probability: float = 0.5) -> bool:
        return self.next_float(domain, key, salt) < probability

    def choice(self, domain: Domain, key: int, salt: int, options: Sequence[T]) -> T:
        if not options:
            raise ValueError("choice from an empty sequence")
        return options[self.next_int(domain, key, salt, 0, len(options) - 1)]
