#!/usr/bin/env python3
"""
Verify the incremental sieve against the plain reference sieve.

Compares:
1. Every rank below max_rank, queried in random order on one engine
2. The same ranks on fresh engines (spot checks)
3. The engine bitset against the reference flags up to the frontier

Run at small max_rank first, then scale up.
"""

import argparse
import time

import numpy as np

from nthprime.reference import first_primes, prime_flags_upto
from nthprime.sieve import new_sieve


def verify_ranks(max_rank: int, seed: int = 123, verbose: bool = True) -> bool:
    """Query ranks [0, max_rank) out of order on one engine."""
    if verbose:
        print(f"\n=== Verifying ranks below {max_rank:,} (shuffled, seed={seed}) ===")

    expected = first_primes(max_rank)
    ranks = np.random.default_rng(seed).permutation(max_rank)

    t0 = time.time()
    sieve = new_sieve()
    errors = 0
    for n in ranks:
        got = sieve.nth_prime(int(n))
        if got != expected[n]:
            errors += 1
            if errors <= 10:
                print(f"  MISMATCH at rank {n}: expected={expected[n]}, got={got}")

    if verbose:
        print(f"  {max_rank:,} queries in {time.time() - t0:.2f}s, frontier={sieve.frontier:,}")
        if errors == 0:
            print(f"  ✓ All {max_rank:,} ranks match!")
        else:
            print(f"  ✗ {errors:,} mismatches found")

    return errors == 0


def verify_fresh(max_rank: int, samples: int = 50, seed: int = 123, verbose: bool = True) -> bool:
    """Fresh engines give the same answers as the reference."""
    if verbose:
        print(f"\n=== Verifying {samples} fresh engines ===")

    expected = first_primes(max_rank)
    ranks = np.random.default_rng(seed).integers(0, max_rank, size=samples)

    errors = 0
    for n in ranks:
        got = new_sieve().nth_prime(int(n))
        if got != expected[n]:
            errors += 1
            print(f"  MISMATCH at rank {n}: expected={expected[n]}, got={got}")

    if verbose:
        print(f"  {'✓' if errors == 0 else '✗'} {samples - errors}/{samples} match")

    return errors == 0


def verify_flags(max_rank: int, verbose: bool = True) -> bool:
    """The bitset below the frontier equals the reference prime flags."""
    if verbose:
        print(f"\n=== Verifying bitset up to the frontier ===")

    sieve = new_sieve()
    for n in (10, max_rank // 2, max_rank - 1):
        sieve.nth_prime(n)

    frontier = sieve.frontier
    flags = sieve.flags.to_bool_array()[:frontier]
    reference = prime_flags_upto(frontier - 1)

    # 0 and 1 are excluded at extraction, not in the bitset
    diff = np.flatnonzero(flags[2:] != reference[2:]) + 2
    if verbose:
        if len(diff) == 0:
            print(f"  ✓ {frontier - 2:,} flags match")
        else:
            print(f"  ✗ {len(diff):,} flags differ, first at {diff[:5].tolist()}")

    return len(diff) == 0


def main():
    parser = argparse.ArgumentParser(description='Verify the incremental sieve')
    parser.add_argument('--max-rank', type=int, default=10_000, help='Ranks checked: [0, max_rank)')
    parser.add_argument('--seed', type=int, default=123)
    args = parser.parse_args()

    results = [
        verify_ranks(args.max_rank, args.seed),
        verify_fresh(args.max_rank, seed=args.seed),
        verify_flags(args.max_rank),
    ]

    print()
    if all(results):
        print("ALL CHECKS PASSED")
    else:
        print("SOME CHECKS FAILED")
        raise SystemExit(1)


if __name__ == '__main__':
    main()
