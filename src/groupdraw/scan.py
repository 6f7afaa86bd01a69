#!/usr/bin/env python3
"""Scan seeds to find draws that complete under the confederation constraints.

Usage: groupdraw-scan [config.yaml] [-n MAX_SEED]
"""

import argparse
import io
import sys
from pathlib import Path

from groupdraw.config import load_draw_config
from groupdraw.constraints import validate_draw
from groupdraw.draw import run_draw


def scan_seed(setup: dict, seed: int) -> dict:
    """Run a single seed and return summary info."""
    # Suppress the draw engine's progress output
    old_stdout = sys.stdout
    sys.stdout = io.StringIO()
    try:
        drawn = run_draw(setup, setup["registry"], seed=seed)
    finally:
        sys.stdout = old_stdout

    result = drawn["result"]
    validation = validate_draw(result.groups, setup["registry"],
                               hosts=drawn["hosts"])
    placed = sum(1 for slots in result.groups.values() for t in slots if t is not None)
    slots = sum(len(s) for s in result.groups.values())

    return {
        "seed": seed,
        "ok": result.success and validation["valid"],
        "success": result.success,
        "placed": placed,
        "slots": slots,
        "violations": len(validation["errors"]),
    }


def main():
    parser = argparse.ArgumentParser(
        description="Scan seeds to find draws that satisfy all constraints",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to draw setup YAML (default: config.yaml)"
    )
    parser.add_argument(
        "-n", "--max-seed", type=int, default=100,
        help="Maximum seed to try (default: 100, scans 0..N-1)"
    )
    args = parser.parse_args()

    if not Path(args.config).exists():
        print(f"Error: config file {args.config} not found")
        sys.exit(1)

    try:
        setup = load_draw_config(args.config)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    max_seed = args.max_seed

    print(f"Scanning seeds 0..{max_seed - 1} using {args.config}...")
    print(f"{'Seed':>6}  {'Placed':>9}  {'Viol':>4}  Result")
    print("-" * 40)

    good_seeds = []
    for seed in range(max_seed):
        result = scan_seed(setup, seed)
        status = "OK" if result["ok"] else "FAIL"
        placed = f"{result['placed']}/{result['slots']}"
        print(f"{seed:>6}  {placed:>9}  {result['violations']:>4}  {status}",
              flush=True)
        if result["ok"]:
            good_seeds.append(seed)

    print("-" * 40)
    if good_seeds:
        print(f"\nGood seeds ({len(good_seeds)}/{max_seed}): "
              f"{', '.join(str(s) for s in good_seeds)}")
    else:
        print(f"\nNo good seeds found in 0..{max_seed - 1}")

    sys.exit(0 if good_seeds else 1)


if __name__ == "__main__":
    main()
