"""
Diagnostic dump of sieve state.

A SieveSnapshot is handed to the configured sink after every query when
debugging is enabled. Sinks only observe; the engine passes copies.
"""

import sys
from dataclasses import dataclass

import numpy as np

from .bitset import GrowableBitSet


@dataclass(frozen=True, eq=False)
class SieveSnapshot:
    """State of the engine right after a query."""
    flags: GrowableBitSet
    rank: int
    frontier: int
    upper_bound: int
    primes: np.ndarray

    @property
    def candidates(self) -> int:
        """Set bits in [2, frontier), i.e. the primes the bitset encodes."""
        stop = min(self.frontier, len(self.flags))
        return self.flags.count(2, stop) if stop > 2 else 0


def format_snapshot(snapshot: SieveSnapshot, preview: int = 10) -> str:
    """Multi-line summary of a snapshot, showing preview primes from each end."""
    primes = snapshot.primes
    lines = [
        f"[nthprime] rank={snapshot.rank:,}",
        f"    upper_bound={snapshot.upper_bound:,}  frontier={snapshot.frontier:,}",
        f"    flags: {len(snapshot.flags):,} bits, {snapshot.flags.nbytes / 1e6:.3f}MB, "
        f"{snapshot.candidates:,} candidates",
        f"    primes: {len(primes):,}",
    ]
    if preview and len(primes):
        head = ', '.join(str(p) for p in primes[:preview])
        lines.append(f"    first: {head}")
        if len(primes) > preview:
            tail = ', '.join(str(p) for p in primes[-preview:])
            lines.append(f"    last:  {tail}")
    return '\n'.join(lines)


def print_snapshot(snapshot: SieveSnapshot, preview: int = 10, stream=None):
    """Default sink: print the snapshot summary to stderr."""
    if stream is None:
        stream = sys.stderr
    print(format_snapshot(snapshot, preview), file=stream, flush=True)
