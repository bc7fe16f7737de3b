"""Deterministic RNG using xxhash.

The outcome of a run depends ONLY on the seed and the order of draws.
Every value is a pure function of (seed, stream_id, counter), so a stream
is reproducible bit-for-bit on every platform and Python build.
"""

from __future__ import annotations

import struct

import xxhash


class DeterministicRNG:
    """Stateless counter-indexed pseudo-random number generator.

    Each call is a pure function of (seed, stream_id, counter), with no
    internal mutable state.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, stream_id: int, counter: int) -> int:
        payload = struct.pack("<qiq", self._seed, stream_id, counter)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, stream_id: int, counter: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(stream_id, counter) / (self._MAX_UINT64 + 1)

    def next_int(self, stream_id: int, counter: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(stream_id, counter)
        return low + int(f * (high - low + 1))


class RandomStream:
    """Sequential view over :class:`DeterministicRNG`.

    Draw *n* of a stream is ``DeterministicRNG(seed).next_float(stream_id, n)``.
    Two streams built from the same seed yield the same sequence.
    """

    __slots__ = ("_rng", "_stream_id", "_counter")

    def __init__(self, seed: int, stream_id: int = 0) -> None:
        self._rng = DeterministicRNG(seed)
        self._stream_id = stream_id
        self._counter = 0

    @property
    def seed(self) -> int:
        return self._rng.seed

    @property
    def draws(self) -> int:
        """Number of values drawn since construction or the last reset."""
        return self._counter

    def reset(self, seed: int | None = None) -> None:
        if seed is not None:
            self._rng = DeterministicRNG(seed)
        self._counter = 0

    def fraction(self) -> float:
        value = self._rng.next_float(self._stream_id, self._counter)
        self._counter += 1
        return value

    def rand_helper(self, n: int) -> int:
        """Integer in [0, n); 0 when n <= 0."""
        if n <= 0:
            return 0
        return min(int(self.fraction() * n), n - 1)

    def rand_range(self, low: int, high: int) -> int:
        """Integer in [low, high] inclusive."""
        return low + self.rand_helper(high - low + 1)
