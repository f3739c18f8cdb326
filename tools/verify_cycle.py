#!/usr/bin/env python3
"""Cross-check extrapolated tower heights against brute force.

Brute forces the first --max-n rocks with the Numba simulator, then asks the
cycle detector for the height at a spread of rock counts and compares.

Usage:
  python tools/verify_cycle.py input.txt
  python tools/verify_cycle.py input.txt --max-n 200000 --samples 50
  python tools/verify_cycle.py input.txt --strategy full-row --no-phase
"""

import argparse
import os
import sys
import time

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from rockfall.analysis.cycle import CycleDetector, DetectorSettings, SnapshotStrategy
from rockfall.analysis.fast_sim import brute_force_heights, warmup
from rockfall.game.jets import load_jets
from rockfall.game.rocks import ROCK_CATALOG


def main():
    parser = argparse.ArgumentParser(description="Compare extrapolation with brute force")
    parser.add_argument("input", help="Path to the jet pattern file")
    parser.add_argument("--max-n", type=int, default=100_000,
                        help="Largest rock count to brute force (default 100000)")
    parser.add_argument("--samples", type=int, default=20,
                        help="Rock counts to compare (default 20)")
    parser.add_argument("--strategy", choices=[s.value for s in SnapshotStrategy],
                        default=SnapshotStrategy.SEALED.value)
    parser.add_argument("--no-phase", action="store_true")
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    jets = load_jets(args.input)
    print(f"{len(jets)} jets, brute forcing {args.max_n} rocks...", flush=True)

    warmup()
    t0 = time.time()
    expected = brute_force_heights(jets, ROCK_CATALOG, args.max_n)
    print(f"  brute force: {time.time() - t0:.2f}s, height {expected[-1]}")

    settings = DetectorSettings(
        strategy=SnapshotStrategy(args.strategy),
        include_phase=not args.no_phase,
        max_rocks=args.max_n,
    )
    t0 = time.time()
    detector = CycleDetector(jets, ROCK_CATALOG, settings)
    detector.run(args.max_n)
    print(f"  detection:   {time.time() - t0:.2f}s, cycle {detector.cycle}")

    rng = np.random.default_rng(args.seed)
    counts = sorted(set(rng.integers(0, args.max_n + 1, size=args.samples).tolist()) | {args.max_n})

    mismatches = 0
    for n in counts:
        got = detector.run(n).height
        if got != expected[n]:
            mismatches += 1
            print(f"  MISMATCH at {n}: extrapolated {got}, brute force {expected[n]}")

    print(f"{len(counts) - mismatches}/{len(counts)} rock counts agree")
    sys.exit(1 if mismatches else 0)


if __name__ == "__main__":
    main()
