"""
Incremental sieve for the prime at a given rank.

    >>> from nthprime import new_sieve
    >>> sieve = new_sieve()
    >>> sieve.nth_prime(99)
    541
"""

from .bitset import GrowableBitSet
from .bounds import upper_bound
from .config import SieveConfig, load_config
from .diagnostics import SieveSnapshot, print_snapshot
from .sieve import IncrementalSieve, SieveBoundError, SieveStats, new_sieve

__all__ = [
    'GrowableBitSet',
    'IncrementalSieve',
    'SieveBoundError',
    'SieveConfig',
    'SieveSnapshot',
    'SieveStats',
    'load_config',
    'new_sieve',
    'print_snapshot',
    'upper_bound',
]
