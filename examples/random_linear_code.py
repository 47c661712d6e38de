#!/usr/bin/env python3
"""
Example script: Decode a random regular LDPC code

Samples a random (bit degree, check degree) regular code and compares the
bit-flip and belief propagation decoders on the binary symmetric channel.
"""

import sys
import argparse
from pathlib import Path

import numpy as np

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tanner import BpDecoder, ClassicalSimulator, FlipDecoder, LinearCode, SamplingError


def main():
    parser = argparse.ArgumentParser(description="Compare decoders on a random regular LDPC code")
    parser.add_argument("--bits", type=int, default=120, help="Block size (default: 120)")
    parser.add_argument("--checks", type=int, default=90, help="Number of checks (default: 90)")
    parser.add_argument("--bit-degree", type=int, default=3, help="Checks per bit (default: 3)")
    parser.add_argument("--check-degree", type=int, default=4, help="Bits per check (default: 4)")
    parser.add_argument("-s", "--shots", type=int, default=1000, help="Shots per rate (default: 1000)")
    parser.add_argument("--max-iter", type=int, default=30, help="Maximum BP iterations (default: 30)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    args = parser.parse_args()

    sampler = LinearCode.random_regular_code(
        block_size=args.bits,
        number_of_checks=args.checks,
        bit_degree=args.bit_degree,
        check_degree=args.check_degree,
    )
    try:
        code = sampler.sample_with(np.random.default_rng(args.seed))
    except SamplingError as error:
        raise SystemExit(str(error))

    print(f"Sampled {code!r} with dimension {code.dimension}")
    rates = [0.01, 0.02, 0.04, 0.06, 0.08]
    for decoder in [FlipDecoder(code), BpDecoder(code, error_rate=0.05, max_iterations=args.max_iter)]:
        print(f"\n=== {decoder} ===")
        ClassicalSimulator(code, decoder).run_experiment(
            rates, total_shots=args.shots, verbose=True, seed=args.seed
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
