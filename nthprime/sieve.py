"""
Incremental Sieve of Eratosthenes for the prime at a given rank.

    let A be a bit array over 0..U, bits set for 2 and every odd number
    for each odd i < ceil(sqrt(U)) with A[i] set
        clear A[j] for j = i^2, i^2 + i, ... below U
    the primes below U are exactly the set indices >= 2

The engine keeps A and the frontier (the U it was last sieved to) between
queries. A larger query grows A, seeds the new odd positions, and marks only
from the old frontier onwards: for base i the first multiple cleared is
max(i^2, ceil(frontier / i) * i). Smaller multiples were cleared by the
earlier pass, and i^2 is still required when the frontier lies below it.

Only odd candidates are ever seeded (plus 2), so base 2 has nothing to clear.
"""

import math
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional

import numpy as np
from numba import njit

from .bitset import GrowableBitSet, bit_is_set, clear_bits
from .bounds import check_rank, upper_bound
from .config import SieveConfig
from .diagnostics import SieveSnapshot, print_snapshot


class SieveBoundError(IndexError):
    """The sieve holds fewer primes than the requested rank needs."""


@dataclass(frozen=True)
class SieveStats:
    """
    Work done by the most recent query.

    bits_seeded counts odd positions written as candidates; bits_cleared
    counts candidates turned off (set -> clear), not multiples visited.
    """
    rank: int = -1
    upper_bound: int = 0
    extended: bool = False
    bits_seeded: int = 0
    bits_cleared: int = 0


def ceil_sqrt(n: int) -> int:
    r = math.isqrt(n)
    return r if r * r == n else r + 1


@njit
def mark_composites(words: np.ndarray, frontier: int, upper: int, base_limit: int) -> int:
    """
    Clear odd-base multiples in [frontier, upper).

    Bases are odd i < base_limit whose bit is still set; since bases are
    visited in increasing order, each base's bit is final when it is read.
    Returns the number of bits cleared.
    """
    cleared = 0
    for i in range(3, base_limit, 2):
        if not bit_is_set(words, i):
            continue
        start = i * i
        resume = ((frontier + i - 1) // i) * i
        if resume > start:
            start = resume
        cleared += clear_bits(words, start, upper, i)
    return cleared


class IncrementalSieve:
    """
    Prime-at-rank engine that reuses its sieve across queries.

    Not thread-safe: flags and frontier are mutated in place, so callers
    sharing an instance must serialize access.
    """

    def __init__(self, config: Optional[SieveConfig] = None,
                 sink: Optional[Callable[[SieveSnapshot], None]] = None):
        if config is None:
            config = SieveConfig()
        if sink is None:
            sink = partial(print_snapshot, preview=config.preview)
        self._config = config
        self._sink = sink
        self._flags = GrowableBitSet()
        self._frontier = 0
        self._primes = np.empty(0, dtype=np.int64)
        self._stats = SieveStats()

    @property
    def config(self) -> SieveConfig:
        return self._config

    @property
    def frontier(self) -> int:
        """Highest bound sieved so far (0 before the first query)."""
        return self._frontier

    @property
    def flags(self) -> GrowableBitSet:
        """Copy of the candidate bitset."""
        return self._flags.copy()

    @property
    def primes(self) -> np.ndarray:
        """Copy of the primes below the frontier."""
        return self._primes.copy()

    @property
    def stats(self) -> SieveStats:
        return self._stats

    def _extend(self, bound: int) -> SieveStats:
        """Sieve [frontier, bound) and append the new primes."""
        old = self._frontier
        self._flags.resize(bound + 1)

        if old == 0:
            self._flags.set(2)
            seeded = 1 + self._flags.set_range(3, bound + 1, 2)
        else:
            # The bit at the old frontier was outside the previous marking range
            seeded = self._flags.set_range(old | 1, bound + 1, 2)

        cleared = mark_composites(self._flags.words, old, bound, ceil_sqrt(bound))

        # Grow the cache once and scan the new range straight into its tail
        lo = max(old, 2)
        known = len(self._primes)
        primes = np.empty(known + self._flags.count(lo, bound), dtype=np.int64)
        primes[:known] = self._primes
        self._flags.collect(lo, bound, primes[known:])
        self._primes = primes
        self._frontier = bound

        return SieveStats(extended=True, bits_seeded=seeded, bits_cleared=cleared)

    def nth_prime(self, n: int) -> int:
        """
        Prime at 0-indexed rank n (0 -> 2, 1 -> 3, 19 -> 71).

        Raises
        ------
        TypeError
            If n is not an integer.
        ValueError
            If n is negative.
        OverflowError
            If the bound for n does not fit in int64.
        SieveBoundError
            If the sieve came up short of n + 1 primes.
        """
        n = check_rank(n)
        bound = upper_bound(n)

        if bound > self._frontier:
            work = self._extend(bound)
        else:
            work = SieveStats()
        self._stats = SieveStats(rank=n, upper_bound=bound, extended=work.extended,
                                 bits_seeded=work.bits_seeded, bits_cleared=work.bits_cleared)

        if self._config.debug:
            self._sink(SieveSnapshot(
                flags=self._flags.copy(),
                rank=n,
                frontier=self._frontier,
                upper_bound=bound,
                primes=self._primes.copy(),
            ))

        if n >= len(self._primes):
            raise SieveBoundError(
                f"rank {n:,} needs {n + 1:,} primes but the sieve below "
                f"{self._frontier:,} holds {len(self._primes):,}")
        return int(self._primes[n])

    def __repr__(self) -> str:
        return f"IncrementalSieve(frontier={self._frontier:,}, primes={len(self._primes):,})"


def new_sieve(config: Optional[SieveConfig] = None,
              sink: Optional[Callable[[SieveSnapshot], None]] = None) -> IncrementalSieve:
    """Create an engine with empty state."""
    return IncrementalSieve(config=config, sink=sink)
