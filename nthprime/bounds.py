"""
Upper bounds for the prime at a given rank.

Responsibility: bound estimation only. No sieve state.

Rosser's theorem gives p_k < k (ln k + ln ln k) for the k-th prime, k >= 6.
The formula is applied to the 0-indexed rank n (so k = n + 1 is bounded with
n), and the slack factor 1.05 plus the additive 10 absorb that off-by-one
and the small ranks (2-4) where Rosser does not apply yet.

The bound is exclusive: the prime at rank n is strictly below upper_bound(n).
"""

import math

import numpy as np

# Largest bound the int64-indexed sieve can address
MAX_BOUND = np.iinfo(np.int64).max

SMALL_RANK_BOUND = 6
SLACK_FACTOR = 1.05
SLACK_OFFSET = 10


def check_rank(n) -> int:
    """
    Validate a rank and return it as a Python int.

    Raises
    ------
    TypeError
        If n is not an integer (bool is rejected too).
    ValueError
        If n is negative.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise TypeError(f"rank must be an integer, got {type(n).__name__}")
    n = int(n)
    if n < 0:
        raise ValueError(f"rank must be non-negative, got {n}")
    return n


def upper_bound(n: int) -> int:
    """
    Exclusive upper bound for the prime at 0-indexed rank n.

    Parameters
    ----------
    n : int
        Rank (0 -> 2, 1 -> 3, ...).

    Returns
    -------
    int
        Bound U with nth_prime(n) < U.

    Raises
    ------
    OverflowError
        If U does not fit in a signed 64-bit integer.
    """
    n = check_rank(n)
    if n <= 1:
        return SMALL_RANK_BOUND

    estimate = math.ceil(n * (math.log(n) + math.log(math.log(n))))
    bound = int(estimate * SLACK_FACTOR + SLACK_OFFSET)

    if bound > MAX_BOUND:
        raise OverflowError(f"upper bound for rank {n:,} exceeds the int64 range")
    return bound
