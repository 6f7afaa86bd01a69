"""Round-robin group-stage match scheduling (circle method)."""

from groupdraw.models import (
    HOME_AWAY_COMP_TYPE, SUPPORTED_COMP_TYPES, Match,
)


# Placeholder for odd team counts; None can never collide with a team name
BYE = None


def schedule_group(teams: list[str], home_and_away: bool = False,
                   offset: int = 0) -> dict[int, list[Match]]:
    """Generate a round-robin schedule for one group using the circle method.

    For N teams: N-1 matchdays if even, N matchdays (one bye each) if odd.
    Post-processing passes run in a fixed order:

    1. rotation produces the base round-robin (position 0 stays fixed,
       the last team moves to position 1 after every round);
    2. base rounds are rotated by ``offset`` (0 keeps the natural order);
    3. the first match of every even-numbered matchday of the first leg
       has home/away flipped;
    4. for home-and-away, the second leg is the exact reverse-fixture list
       of the first leg, round for round.

    Works on positions, not identities, so duplicate names are tolerated.
    Fewer than two teams gives an empty schedule.
    """
    if len(teams) < 2:
        return {}

    lineup = list(teams)
    if len(lineup) % 2 == 1:
        lineup.append(BYE)
    n = len(lineup)

    base_rounds: list[list[Match]] = []
    for _ in range(n - 1):
        matches = []
        for i in range(n // 2):
            t1 = lineup[i]
            t2 = lineup[n - 1 - i]
            if t1 is BYE or t2 is BYE:
                continue
            matches.append(Match(t1, t2))
        base_rounds.append(matches)

        # Rotate: keep position 0 fixed, last element moves to position 1
        lineup = [lineup[0], lineup[-1]] + lineup[1:-1]

    num_base = len(base_rounds)
    shift = offset % num_base
    first_leg = base_rounds[shift:] + base_rounds[:shift]

    # Even matchdays swap venue for their opening match only
    for index, matches in enumerate(first_leg):
        if (index + 1) % 2 == 0 and matches:
            first_leg[index] = [matches[0].reversed()] + matches[1:]

    all_rounds = list(first_leg)
    if home_and_away:
        for matches in first_leg:
            all_rounds.append([m.reversed() for m in matches])

    return {i + 1: matches for i, matches in enumerate(all_rounds)}


def schedule_competition(groups: dict[str, list[str]],
                         use_home_away: bool = False,
                         stagger: bool = False) -> dict[str, dict[int, list[Match]]]:
    """Schedule every group independently.

    With ``stagger``, groups are taken in sorted-name order and group i
    (0-based) starts its rotation at offset (i + 1) % (teams - 1), so
    parallel groups do not open with the same pairing pattern.
    """
    schedule: dict[str, dict[int, list[Match]]] = {}
    for index, group_name in enumerate(sorted(groups)):
        teams = list(groups[group_name])
        offset = 0
        if stagger and len(teams) > 2:
            offset = (index + 1) % (len(teams) - 1)
        schedule[group_name] = schedule_group(teams, use_home_away, offset)

    # Keep the caller's group order
    return {name: schedule[name] for name in groups}


def matches_by_matchday(schedule: dict[str, dict[int, list[Match]]],
                        matchday: int) -> list[tuple[str, Match]]:
    """All matches on one matchday across groups, tagged with group name."""
    result = []
    for group_name, group_schedule in schedule.items():
        for match in group_schedule.get(matchday, []):
            result.append((group_name, match))
    return result


def total_matchdays(schedule: dict[str, dict[int, list[Match]]]) -> int:
    """Highest matchday number present in any group, or 0."""
    return max(
        (max(group_schedule, default=0) for group_schedule in schedule.values()),
        default=0,
    )


def supports_group_stage(comp_type: str) -> bool:
    return comp_type in SUPPORTED_COMP_TYPES


def should_use_home_away(comp_type: str) -> bool:
    return comp_type == HOME_AWAY_COMP_TYPE


def verify_group_schedule(schedule: dict[int, list[Match]], teams: list[str],
                          home_and_away: bool = False) -> dict:
    """Verify a group schedule is a complete round robin.

    Returns dict with:
    - valid: bool
    - errors: list of error strings
    - pair_counts: dict of (team_a, team_b) sorted pair -> count
    - games_per_team: dict of team -> game count
    """
    errors = []
    pair_counts: dict[tuple[str, str], int] = {}
    directed: set[tuple[str, str]] = set()
    games_per_team: dict[str, int] = {t: 0 for t in teams}

    expected_days = 0
    if len(teams) >= 2:
        base = len(teams) - 1 if len(teams) % 2 == 0 else len(teams)
        expected_days = base * 2 if home_and_away else base
    if sorted(schedule) != list(range(1, expected_days + 1)):
        errors.append(
            f"Matchdays {sorted(schedule)} (expected 1..{expected_days})"
        )

    for matchday, matches in schedule.items():
        teams_on_day = set()
        for m in matches:
            for t in (m.home_team, m.away_team):
                if t in teams_on_day:
                    errors.append(f"Matchday {matchday}: {t} appears twice")
                teams_on_day.add(t)
                games_per_team[t] = games_per_team.get(t, 0) + 1

            key = tuple(sorted([m.home_team, m.away_team]))
            pair_counts[key] = pair_counts.get(key, 0) + 1
            directed.add((m.home_team, m.away_team))

    expected = 2 if home_and_away else 1
    for i, t1 in enumerate(teams):
        for t2 in teams[i + 1:]:
            key = tuple(sorted([t1, t2]))
            count = pair_counts.get(key, 0)
            if count != expected:
                errors.append(
                    f"{t1} vs {t2}: played {count} times (expected {expected})"
                )
            elif home_and_away and not (
                (t1, t2) in directed and (t2, t1) in directed
            ):
                errors.append(f"{t1} vs {t2}: not played home and away")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "pair_counts": pair_counts,
        "games_per_team": games_per_team,
    }
