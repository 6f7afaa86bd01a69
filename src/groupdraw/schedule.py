#!/usr/bin/env python3
"""Group-stage match scheduler.

    groupdraw-schedule <competition.json> [--matchday N] [--stagger] [-o DIR]

Imports a competition file (e.g. a draw export), schedules every group as a
round robin (home and away for GROUPHA competitions) and prints the
schedule and home/away statistics.

Examples:
    groupdraw-schedule output/20261018120000-Cup.json
    groupdraw-schedule league.json --matchday 2
    groupdraw-schedule league.json -o spring   # also writes spring/schedule.txt
"""

import argparse
import sys
from pathlib import Path

from groupdraw.config import CompetitionImportError, load_competition
from groupdraw.output import format_schedule
from groupdraw.roundrobin import (
    matches_by_matchday, schedule_competition, should_use_home_away,
    total_matchdays,
)
from groupdraw.stats import compute_stats, format_stats_report


def main():
    parser = argparse.ArgumentParser(
        description="Group-stage round-robin match scheduler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Competition file fields:
  compName, numTeams, numThrough, compType (GROUPKO|GROUPHA|GROUP), groups

Matchday order:
  By default every group follows the plain circle-method order, so groups
  of the same size open with the same pairing pattern. Pass --stagger to
  start group i (in sorted name order) at rotation offset
  (i + 1) mod (teams - 1).

Exit codes:
  0  Schedule generated
  1  Import failed or file not found
""",
    )
    parser.add_argument("competition", help="Competition JSON file to import")
    parser.add_argument(
        "--matchday", type=int, default=None,
        help="Only print fixtures for this matchday"
    )
    parser.add_argument(
        "--stagger", action="store_true",
        help="Offset each group's rotation so groups don't open alike "
             "(off by default: every group uses the plain circle order)"
    )
    parser.add_argument(
        "--output-prefix", "-o", default=None,
        help="Directory to write schedule.txt and stats.txt into"
    )
    args = parser.parse_args()

    if not Path(args.competition).exists():
        print(f"Error: competition file {args.competition} not found")
        sys.exit(1)

    print(f"Importing {args.competition}...")
    try:
        competition = load_competition(args.competition)
    except CompetitionImportError as e:
        print(f"Error: {e}")
        sys.exit(1)

    home_away = should_use_home_away(competition.comp_type)
    print(f"  {competition.comp_name}: {len(competition.groups)} groups, "
          f"type {competition.comp_type}"
          f"{' (home and away)' if home_away else ''}")

    schedule = schedule_competition(competition.groups, home_away,
                                    stagger=args.stagger)
    days = total_matchdays(schedule)
    print(f"  {days} matchdays")

    if args.matchday is not None:
        if not 1 <= args.matchday <= days:
            print(f"Error: matchday must be between 1 and {days}")
            sys.exit(1)
        print(f"\n--- MATCHDAY {args.matchday} ---")
        for group_name, match in matches_by_matchday(schedule, args.matchday):
            print(f"  [{group_name}] {match.home_team} vs {match.away_team}")
        return

    schedule_text = format_schedule(schedule, competition.comp_name)
    stats_text = format_stats_report(compute_stats(schedule))
    print("\n" + schedule_text)
    print("\n" + stats_text)

    if args.output_prefix:
        out_dir = Path(args.output_prefix)
        out_dir.mkdir(parents=True, exist_ok=True)
        (out_dir / "schedule.txt").write_text(schedule_text + "\n", encoding="utf-8")
        (out_dir / "stats.txt").write_text(stats_text + "\n", encoding="utf-8")
        print(f"Written: {out_dir / 'schedule.txt'}")
        print(f"Written: {out_dir / 'stats.txt'}")


if __name__ == "__main__":
    main()
