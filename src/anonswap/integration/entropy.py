"""
Entropy sources for reserve obfuscation.

`Sha256EntropyPool` is a SHA-256 hash chain:

    state_0     = H("AnonSwapEntropy" || seed)
    absorb(x):    state = H(state || "absorb" || x)
    next_u64():   state = H(state || "draw"); return first 8 bytes (big-endian)

Callers feed it whatever unpredictable material they have (block data, user
supplied bytes) through `absorb`. Every draw advances the chain, so two
queries never reuse a multiplier.
"""

from __future__ import annotations

import hashlib
from typing import Iterable, List

from ..core.collaborators import EntropySource
from ..core.obfuscation import U64_MAX


_DOMAIN = b"AnonSwapEntropy"


class Sha256EntropyPool(EntropySource):
    def __init__(self, seed: bytes = b"") -> None:
        if not isinstance(seed, (bytes, bytearray)):
            raise TypeError("seed must be bytes")
        self._state = hashlib.sha256(_DOMAIN + bytes(seed)).digest()

    def absorb(self, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError("data must be bytes")
        self._state = hashlib.sha256(self._state + b"absorb" + bytes(data)).digest()

    def next_u64(self) -> int:
        self._state = hashlib.sha256(self._state + b"draw").digest()
        return int.from_bytes(self._state[:8], "big")


class SequenceEntropySource(EntropySource):
    """Replays a fixed list of draws; raises once they run out."""

    def __init__(self, draws: Iterable[int]) -> None:
        self._draws: List[int] = []
        for d in draws:
            if not isinstance(d, int) or isinstance(d, bool):
                raise TypeError("draws must be ints")
            if not (0 <= d <= U64_MAX):
                raise ValueError(f"draw must be a 64-bit unsigned value: {d}")
            self._draws.append(d)
        self._pos = 0

    @property
    def draws_taken(self) -> int:
        return self._pos

    def next_u64(self) -> int:
        if self._pos >= len(self._draws):
            raise RuntimeError(f"entropy sequence exhausted after {self._pos} draws")
        d = self._draws[self._pos]
        self._pos += 1
        return d
