#!/usr/bin/env python3
"""
Example script: Run a CSS code simulation

This script demonstrates how to use the Tanner framework to estimate the
word error rate of a CSS code under depolarizing noise, decoded by a pair
of classical decoders.
"""

import sys
import csv
import argparse
from pathlib import Path

import numpy as np

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tanner import CssCode, DecoderConfig, LinearCode, QuantumSimulator


def _parse_rates_csv(text: str):
    """
    Parse a comma-separated list of floats, e.g. "0.01,0.02,0.05".
    """
    parts = [p.strip() for p in text.split(",") if p.strip()]
    return [float(p) for p in parts]


def build_code(family: str, distance: int, seed: int) -> CssCode:
    """Builds one of the named CSS codes."""
    if family == "steane":
        return CssCode.steane_code()
    if family == "shor":
        return CssCode.shor_code()
    if family == "toric":
        return CssCode.toric_code(distance)
    classical = LinearCode.random_regular_code(
        block_size=4 * distance, number_of_checks=3 * distance, bit_degree=3, check_degree=4
    ).sample_with(np.random.default_rng(seed))
    return CssCode.hypergraph_product(classical, classical)


def main():
    """Run the main simulation experiment."""
    parser = argparse.ArgumentParser(
        description="Run a CSS code simulation under depolarizing noise",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_simulation.py                              # Toric code, distance 5, BP
  python run_simulation.py --family steane -s 20000
  python run_simulation.py --method matching --distance 7
  python run_simulation.py --family hgp --distance 4 --csv results/hgp.csv
        """
    )
    parser.add_argument(
        "-s", "--shots",
        type=int,
        default=2000,
        help="Number of simulation shots per error rate (default: 2000)"
    )
    parser.add_argument(
        "--family",
        choices=["toric", "steane", "shor", "hgp"],
        default="toric",
        help="Code family (default: toric)"
    )
    parser.add_argument(
        "--distance",
        type=int,
        default=5,
        help="Toric code distance, or size factor of the random hypergraph product (default: 5)"
    )
    parser.add_argument(
        "--method",
        choices=["bp", "flip", "matching"],
        default="bp",
        help="Decoding algorithm (default: bp)"
    )
    parser.add_argument(
        "--max-iter",
        type=int,
        default=50,
        help="Maximum number of BP iterations (default: 50)"
    )
    parser.add_argument(
        "--rates",
        type=_parse_rates_csv,
        default=[0.01, 0.02, 0.04, 0.06, 0.08, 0.10],
        help="Comma-separated depolarizing rates to test, e.g. --rates 0.01,0.05"
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    parser.add_argument(
        "--csv",
        type=str,
        default="",
        help="Append the results to this CSV file (read by plot_results.py)"
    )

    args = parser.parse_args()

    # Setup Code
    code = build_code(args.family, args.distance, args.seed)

    # Configure Decoder
    config = DecoderConfig(method=args.method, max_iter=args.max_iter)

    # Create Simulator
    simulator = QuantumSimulator(code, config=config)

    # Run Experiment
    results = simulator.run_experiment(
        error_rates=args.rates,
        total_shots=args.shots,
        verbose=True,
        return_details=True,
        seed=args.seed,
    )

    # Print summary
    print("\n=== RESULTS SUMMARY ===")
    for p, point in results.items():
        print(f"Depolarizing Rate: {p:.4f} -> WER: {point['wer']:.5f}")

    if args.csv:
        path = Path(args.csv)
        path.parent.mkdir(parents=True, exist_ok=True)
        write_header = not path.exists()
        with path.open("a", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(
                f, fieldnames=["family", "N", "K", "method", "p", "wer", "fails", "shots", "seconds"]
            )
            if write_header:
                writer.writeheader()
            for p, point in results.items():
                writer.writerow({
                    "family": args.family,
                    "N": len(code),
                    "K": code.num_x_logicals,
                    "method": args.method,
                    "p": p,
                    **point,
                })
        print(f"Saved: {path}")

    return results


if __name__ == "__main__":
    main()
