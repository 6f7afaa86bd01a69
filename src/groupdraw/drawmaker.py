#!/usr/bin/env python3
"""Group draw simulator.

    groupdraw-draw [config.yaml] [--seed N] [--reveal-delay SECS] [-o DIR]

Loads a draw setup, sorts teams into pots by ranking, performs the draw
(confederation-constrained for the championship format), reveals it pot by
pot, validates it, and writes a draw export JSON that groupdraw-schedule
can import.

Examples:
    groupdraw-draw                          # default config, random draw
    groupdraw-draw --seed 42 -o draws       # reproducible
    groupdraw-draw custom.yaml --no-export  # print only
"""

import argparse
import sys
from pathlib import Path

from groupdraw.config import load_draw_config
from groupdraw.constraints import format_validation_report, validate_draw
from groupdraw.draw import run_draw
from groupdraw.output import format_groups, format_pots, reveal, write_draw_export


def main():
    parser = argparse.ArgumentParser(
        description="Group draw simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Output files:
  {prefix}/{YYYYMMDDHHMMSS}-{competition}.json   Draw export

Exit codes:
  0  Draw complete
  1  Config error, or the constrained draw found no valid assignment
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to draw setup YAML (default: config.yaml)"
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Random seed for a reproducible draw"
    )
    parser.add_argument(
        "--reveal-delay", type=float, default=0.03,
        help="Seconds between revealed placements (default: 0.03, 0 = instant)"
    )
    parser.add_argument(
        "--output-prefix", "-o", default="output",
        help="Output directory for the draw export (default: output/)"
    )
    parser.add_argument(
        "--no-export", action="store_true",
        help="Do not write the draw export file"
    )
    args = parser.parse_args()

    if not Path(args.config).exists():
        print(f"Error: config file {args.config} not found")
        sys.exit(1)

    print(f"Loading draw setup from {args.config}...")
    try:
        setup = load_draw_config(args.config)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    competition = setup["competition"]
    registry = setup["registry"]

    print(f"Drawing {competition['name']} ({competition['format']}, "
          f"{len(setup['teams'])} teams, {competition['num_groups']} groups, "
          f"seed={args.seed})...")
    drawn = run_draw(setup, registry, seed=args.seed)
    result = drawn["result"]

    print(format_pots(drawn["pots"], registry))

    print("\nRevealing draw...")
    reveal(result.groups, delay=args.reveal_delay)
    print(format_groups(result.groups, registry))

    validation = validate_draw(result.groups, registry, hosts=drawn["hosts"])
    print("\n" + format_validation_report(validation))

    if not result.success:
        print("\nDraw failed: no valid assignment for the remaining pots.")
        print("Re-run the draw (or try another --seed).")
        sys.exit(1)

    if not args.no_export:
        write_draw_export(result.groups, competition["name"],
                          competition["num_through"], args.output_prefix)

    print("\nDraw complete!")


if __name__ == "__main__":
    main()
