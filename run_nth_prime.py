#!/usr/bin/env python3
"""
Answer prime-at-rank queries on one incremental sieve.

Usage:
    python run_nth_prime.py 0 19 99 1000000
    python run_nth_prime.py --config config/custom.yaml
    NTHPRIME_DEBUG=1 python run_nth_prime.py 500
"""

import argparse
import time
from dataclasses import replace

from nthprime.config import config_from_mapping, read_settings
from nthprime.sieve import new_sieve


def main(argv=None):
    parser = argparse.ArgumentParser(description='Find the prime at each rank (0 -> 2)')
    parser.add_argument('ranks', type=int, nargs='*',
                        help='0-indexed ranks; defaults to `ranks` from the config')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to config file (default: config/default.yaml when present)')
    parser.add_argument('--debug', action='store_true',
                        help='Dump sieve state after every query')
    args = parser.parse_args(argv)

    settings = read_settings(args.config)
    config = config_from_mapping(settings)
    if args.debug:
        config = replace(config, debug=True)

    ranks = args.ranks or settings.get('ranks', [])
    if not ranks:
        parser.error('no ranks given and none in the config')

    print("=" * 60)
    print("Incremental Sieve - Prime at Rank")
    print("=" * 60)
    print(f"  ranks = {len(ranks)}")
    print(f"  debug = {config.debug}")
    print()

    sieve = new_sieve(config)
    total_start = time.time()

    for n in ranks:
        t0 = time.time()
        p = sieve.nth_prime(n)
        stats = sieve.stats
        reuse = "extended" if stats.extended else "reused"
        print(f"  rank {n:>12,} -> {p:>15,}   ({reuse}, {stats.bits_cleared:,} bits cleared, "
              f"{time.time() - t0:.3f}s)")

    print()
    print(f"Frontier: {sieve.frontier:,}")
    print(f"Total runtime: {time.time() - total_start:.2f}s")


if __name__ == '__main__':
    main()
