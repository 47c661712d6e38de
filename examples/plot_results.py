#!/usr/bin/env python3
"""
Plot saved simulation results.

Reads one or many CSV files written by run_simulation.py --csv and plots the
word error rate against the depolarizing rate, one curve per
(family, N, method), with Wilson 95% confidence intervals.

Examples:
  python examples/plot_results.py results/toric.csv
  python examples/plot_results.py results/*.csv --out results/wer.png --no-error-bars
"""

from __future__ import annotations

import argparse
import csv
from collections import defaultdict
from pathlib import Path
from typing import Dict, List, Tuple

import matplotlib.pyplot as plt


def load_csv(path: Path) -> List[Dict[str, str]]:
    with path.open("r", newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def wilson_ci_95(fails: int, shots: int) -> Tuple[float, float]:
    """
    Wilson score interval for a binomial proportion at ~95% confidence.
    Returns (lo, hi). If shots==0, returns (0,0).
    """
    if shots <= 0:
        return 0.0, 0.0
    z = 1.959963984540054
    n = float(shots)
    phat = float(fails) / n
    denom = 1.0 + (z * z) / n
    center = (phat + (z * z) / (2.0 * n)) / denom
    half = (z / denom) * ((phat * (1.0 - phat) / n + (z * z) / (4.0 * n * n)) ** 0.5)
    return max(0.0, center - half), min(1.0, center + half)


def group_points(rows: List[Dict[str, str]]) -> Dict[Tuple[str, int, str], List[Tuple[float, int, int]]]:
    """
    For each (family, N, method) and p, keep the row with the largest shot count.
    Returns: {(family, N, method): [(p, fails, shots), ... sorted by p]}
    """
    by = defaultdict(dict)
    for r in rows:
        key = (r["family"], int(r["N"]), r["method"])
        p = float(r["p"])
        fails = int(float(r["fails"]))
        shots = int(float(r["shots"]))
        cur = by[key].get(p)
        if cur is None or shots > cur[1]:
            by[key][p] = (fails, shots)
    return {
        key: sorted((p, fails, shots) for p, (fails, shots) in points.items())
        for key, points in by.items()
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Plot Tanner simulation results from CSV.")
    parser.add_argument("csv", nargs="+", help="Result CSV file(s)")
    parser.add_argument("--out", type=str, default="results/wer_vs_p.png", help="Output image path")
    parser.add_argument("--title", type=str, default="WER vs depolarizing rate", help="Plot title")
    parser.add_argument("--dpi", type=int, default=200, help="Output DPI (default: 200)")
    parser.add_argument("--log", action="store_true", help="Logarithmic WER axis")
    parser.add_argument("--no-error-bars", action="store_true",
                        help="Disable Wilson confidence interval error bars")
    args = parser.parse_args()

    rows: List[Dict[str, str]] = []
    for name in args.csv:
        rows.extend(load_csv(Path(name)))
    if not rows:
        raise SystemExit("No rows found in selected CSV file(s).")

    plt.figure(figsize=(8, 5))
    for (family, n, method), points in sorted(group_points(rows).items(), key=lambda kv: kv[0][1]):
        xs = [p for p, _, _ in points]
        ys = [fails / shots if shots else 0.0 for _, fails, shots in points]
        label = f"{family} N={n} ({method})"
        if args.no_error_bars:
            plt.plot(xs, ys, "-o", linewidth=1.5, markersize=3, label=label)
            continue
        yerr_lo, yerr_hi = [], []
        for (_, fails, shots), w in zip(points, ys):
            lo, hi = wilson_ci_95(fails, shots)
            yerr_lo.append(max(0.0, w - lo))
            yerr_hi.append(max(0.0, hi - w))
        plt.errorbar(xs, ys, yerr=[yerr_lo, yerr_hi], fmt="-o", linewidth=1.5,
                     markersize=3, capsize=2, label=label)

    if args.log:
        plt.yscale("log")
    plt.title(args.title)
    plt.xlabel("Depolarizing rate p")
    plt.ylabel("Word error rate (WER)")
    plt.grid(True, alpha=0.3)
    plt.legend(fontsize=8)
    plt.tight_layout()

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out, dpi=args.dpi)
    plt.close()
    print(f"Saved: {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
