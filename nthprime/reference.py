"""
Plain reference sieve.

Responsibility: an independent oracle for checking the engine. One byte per
number, full numpy slicing, rebuilt from scratch on every call. It shares no
code with the word-packed incremental sieve.
"""

import math

import numpy as np


def prime_flags_upto(N: int) -> np.ndarray:
    """
    Boolean array of length N+1 with flags[i] True iff i is prime.

    Evens are never set apart from 2, so only odd bases strike, with
    stride 2p starting at p^2. Empty for N < 0.
    """
    flags = np.zeros(max(N + 1, 0), dtype=bool)
    if N < 2:
        return flags
    flags[2] = True
    flags[3::2] = True
    for p in range(3, math.isqrt(N) + 1, 2):
        if flags[p]:
            flags[p * p::2 * p] = False
    return flags


def primes_upto(N: int) -> np.ndarray:
    """int64 array of all primes <= N."""
    return np.flatnonzero(prime_flags_upto(N)).astype(np.int64)


def first_primes(count: int) -> np.ndarray:
    """
    The first `count` primes (ranks 0 .. count-1).

    The limit starts from the prime number theorem estimate and doubles
    until the sieve holds enough primes.
    """
    if count <= 0:
        return np.empty(0, dtype=np.int64)
    limit = 16
    if count > 5:
        limit = max(limit, int(count * (math.log(count) + math.log(math.log(count)))) + 1)
    while True:
        primes = primes_upto(limit)
        if len(primes) >= count:
            return primes[:count]
        limit *= 2
