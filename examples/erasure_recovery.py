#!/usr/bin/env python3
"""
Example script: Erasure recovery of CSS codes

Estimates the average probability of recovering from random erasures, where
each erased qubit suffers a uniformly random Pauli error.
"""

import sys
import argparse
from pathlib import Path

import numpy as np

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tanner import CssCode, CssErasureDecoder, ErasureChannel


def main():
    parser = argparse.ArgumentParser(description="Average erasure recovery probability of toric codes")
    parser.add_argument("--distances", type=str, default="3,5,7", help="Comma-separated distances (default: 3,5,7)")
    parser.add_argument("-s", "--shots", type=int, default=500, help="Erasure patterns per rate (default: 500)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)
    rates = [0.1, 0.2, 0.3, 0.4, 0.5]
    distances = [int(d) for d in args.distances.split(",") if d.strip()]

    print(f"{'Distance':<10} | " + " | ".join(f"p={p:<6.2f}" for p in rates))
    print("-" * (13 + 11 * len(rates)))
    for distance in distances:
        code = CssCode.toric_code(distance)
        decoder = CssErasureDecoder(code)
        averages = []
        for p in rates:
            channel = ErasureChannel(p)
            probabilities = [
                decoder.recovery_probability(code.random_error(channel, rng))
                for _ in range(args.shots)
            ]
            averages.append(float(np.mean(probabilities)))
        print(f"{distance:<10} | " + " | ".join(f"{a:<8.4f}" for a in averages))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
