#!/usr/bin/env python3
"""
Benchmark incremental reuse against fresh engines.

Compares:
1. One engine answering increasing ranks (extends its sieve each time)
2. A fresh engine per rank (sieves from scratch each time)

The first query pays numba compilation, so a warm-up query runs first.
"""

import argparse
import time
from pathlib import Path

import pandas as pd

from nthprime.sieve import new_sieve

DEFAULT_RANKS = [1_000, 10_000, 100_000, 500_000, 1_000_000, 2_000_000]


def benchmark(ranks, output: Path = None) -> pd.DataFrame:
    """Time each rank incrementally and fresh; return one row per rank."""
    ranks = sorted(ranks)

    print("=" * 60)
    print(f"Incremental Sieve Benchmark: {len(ranks)} ranks, max {ranks[-1]:,}")
    print("=" * 60)

    print("Warming up numba kernels...", end=" ", flush=True)
    t0 = time.time()
    new_sieve().nth_prime(100)
    print(f"{time.time() - t0:.1f}s")
    print()

    print("-" * 60)
    print("Incremental: one engine, increasing ranks")
    print("-" * 60)
    incremental = new_sieve()
    rows = []
    for n in ranks:
        t0 = time.time()
        p = incremental.nth_prime(n)
        elapsed = time.time() - t0
        rows.append({
            'rank': n,
            'prime': p,
            'upper_bound': incremental.stats.upper_bound,
            'incremental_s': elapsed,
            'incremental_cleared': incremental.stats.bits_cleared,
        })
        print(f"  rank={n:,}: {elapsed:.3f}s  ({incremental.stats.bits_cleared:,} bits cleared)")
    print()

    print("-" * 60)
    print("Fresh: new engine per rank")
    print("-" * 60)
    for row in rows:
        fresh = new_sieve()
        t0 = time.time()
        p = fresh.nth_prime(row['rank'])
        elapsed = time.time() - t0
        if p != row['prime']:
            print(f"  MISMATCH at rank {row['rank']:,}: incremental={row['prime']}, fresh={p}")
        row['fresh_s'] = elapsed
        row['fresh_cleared'] = fresh.stats.bits_cleared
        print(f"  rank={row['rank']:,}: {elapsed:.3f}s  ({fresh.stats.bits_cleared:,} bits cleared)")
    print()

    df = pd.DataFrame(rows)
    df['speedup'] = df['fresh_s'] / df['incremental_s']

    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Incremental total: {df['incremental_s'].sum():.2f}s")
    print(f"Fresh total:       {df['fresh_s'].sum():.2f}s")
    print()
    print(df[['rank', 'prime', 'incremental_s', 'fresh_s', 'speedup']].to_string(index=False))

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output, index=False)
        print(f"\nSaved to {output}")

    return df


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Benchmark incremental sieve reuse')
    parser.add_argument('--ranks', type=float, nargs='+', default=DEFAULT_RANKS,
                        help='Ranks to query (floats like 1e6 accepted)')
    parser.add_argument('--output', type=Path, default=Path('data/results/benchmark_sieve.csv'),
                        help='CSV output path')
    args = parser.parse_args()

    benchmark([int(r) for r in args.ranks], args.output)
