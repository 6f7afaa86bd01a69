"""Statistics and home/away balance reporting for group schedules."""

from collections import defaultdict

from groupdraw.models import Match
from groupdraw.roundrobin import total_matchdays


def compute_stats(schedule: dict[str, dict[int, list[Match]]]) -> dict:
    """Compute per-team statistics for a competition schedule.

    Returns dict with home/away counts, games per team, per-group matchday
    counts, and the longest home or away run per team.
    """
    home_counts = defaultdict(int)
    away_counts = defaultdict(int)
    total_games = defaultdict(int)
    team_group: dict[str, str] = {}
    longest_run: dict[str, int] = {}
    matchdays_per_group: dict[str, int] = {}

    for group_name, group_schedule in schedule.items():
        matchdays_per_group[group_name] = len(group_schedule)
        venues: dict[str, list[str]] = defaultdict(list)

        for matchday in sorted(group_schedule):
            for m in group_schedule[matchday]:
                home_counts[m.home_team] += 1
                away_counts[m.away_team] += 1
                total_games[m.home_team] += 1
                total_games[m.away_team] += 1
                team_group.setdefault(m.home_team, group_name)
                team_group.setdefault(m.away_team, group_name)
                venues[m.home_team].append("H")
                venues[m.away_team].append("A")

        for team, seq in venues.items():
            best = run = 0
            prev = None
            for v in seq:
                run = run + 1 if v == prev else 1
                best = max(best, run)
                prev = v
            longest_run[team] = best

    all_teams = sorted(team_group, key=lambda t: (team_group[t], t))
    return {
        "all_teams": all_teams,
        "team_group": team_group,
        "home_counts": dict(home_counts),
        "away_counts": dict(away_counts),
        "total_games": dict(total_games),
        "longest_run": longest_run,
        "matchdays_per_group": matchdays_per_group,
        "total_matchdays": total_matchdays(schedule),
    }


def format_stats_report(stats: dict) -> str:
    """Format statistics into a human-readable report."""
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE STATISTICS")
    lines.append("=" * 60)
    lines.append(f"\nTotal matchdays: {stats['total_matchdays']}")

    lines.append("\n--- HOME/AWAY BALANCE ---")
    lines.append(f"{'Team':<22} {'Grp':>3} {'Home':>5} {'Away':>5} "
                 f"{'Total':>5} {'Diff':>5} {'Run':>4}")
    lines.append("-" * 55)
    for t in stats["all_teams"]:
        h = stats["home_counts"].get(t, 0)
        a = stats["away_counts"].get(t, 0)
        diff = h - a
        flag = " ***" if abs(diff) > 1 else ""
        lines.append(
            f"{t:<22} {stats['team_group'][t]:>3} {h:>5} {a:>5} "
            f"{stats['total_games'].get(t, 0):>5} {diff:>+5} "
            f"{stats['longest_run'].get(t, 0):>4}{flag}"
        )

    return "\n".join(lines)
