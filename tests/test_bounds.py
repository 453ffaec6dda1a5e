"""
Tests for the rank -> upper bound estimator.

The bound is exclusive, so every prime must lie strictly below it.
"""

import numpy as np
import pytest

from nthprime.bounds import MAX_BOUND, SMALL_RANK_BOUND, check_rank, upper_bound
from nthprime.reference import first_primes


class TestUpperBound:

    def test_small_ranks_use_fixed_bound(self):
        assert upper_bound(0) == SMALL_RANK_BOUND
        assert upper_bound(1) == SMALL_RANK_BOUND

    def test_known_values(self):
        """Hand-computed from ceil(n (ln n + ln ln n)) * 1.05 + 10."""
        assert upper_bound(2) == 11
        assert upper_bound(3) == 14
        assert upper_bound(4) == 17

    def test_bound_exceeds_every_prime_below_10000(self):
        primes = first_primes(10_000)
        for n, p in enumerate(primes):
            assert upper_bound(n) > p, f"upper_bound({n}) = {upper_bound(n)} <= p = {p}"

    @pytest.mark.parametrize("n, p", [
        (19, 71),
        (99, 541),
        (500, 3581),
        (986, 7793),
        (2000, 17393),
        (1_000_000, 15_485_867),
        (10_000_000, 179_424_691),
        (100_000_000, 2_038_074_751),
    ])
    def test_bound_covers_known_primes(self, n, p):
        assert upper_bound(n) > p

    def test_bound_is_monotonic(self):
        bounds = [upper_bound(n) for n in range(5000)]
        assert all(a <= b for a, b in zip(bounds, bounds[1:]))

    def test_overflow_beyond_int64(self):
        with pytest.raises(OverflowError):
            upper_bound(10**18)

    def test_largest_bound_fits(self):
        assert upper_bound(10**15) <= MAX_BOUND


class TestCheckRank:

    def test_accepts_ints(self):
        assert check_rank(0) == 0
        assert check_rank(np.int64(7)) == 7
        assert type(check_rank(np.int32(7))) is int

    def test_negative_rank(self):
        with pytest.raises(ValueError):
            check_rank(-1)

    @pytest.mark.parametrize("bad", [1.0, "3", None, True])
    def test_non_integer_rank(self, bad):
        with pytest.raises(TypeError):
            check_rank(bad)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
