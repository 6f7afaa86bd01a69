"""Draw engine: deal teams from ranked pots into groups.

Two draw formats:
1. Standard draw: hosts first, then each pot shuffled and dealt in order.
   No constraints, always succeeds.
2. Championship (World Cup) draw: hosts first, Pot 1 dealt freely, then
   every remaining pot placed by randomized backtracking under
   confederation constraints (one team per non-UEFA confederation per
   group, at most two UEFA teams per group).

Candidate pot orderings are a bounded number of random shuffles rather than
every permutation, which keeps the search finite on large pots.
"""

import random
from typing import Optional

from groupdraw.models import DrawResult, MAX_UEFA_PER_GROUP, Team
from groupdraw.pots import (
    allocate_pots, build_empty_groups, calculate_group_structure,
    host_group_assignments, sort_teams_by_ranking,
)
from groupdraw.registry import NationRegistry

MAX_CANDIDATE_ORDERINGS = 20

Groups = dict[str, list[Optional[Team]]]


def shuffle(items: list, rng: random.Random) -> list:
    """Unweighted Fisher-Yates shuffle into a new list."""
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled


def _copy_groups(groups: Groups) -> Groups:
    # Teams are immutable, so copying slot lists is enough to branch
    return {name: list(slots) for name, slots in groups.items()}


def _first_empty(slots: list[Optional[Team]]) -> int:
    for i, team in enumerate(slots):
        if team is None:
            return i
    return -1


def expected_host_groups(sorted_teams: list[Team],
                         available_groups: list[str]) -> dict[str, str]:
    """Host name -> group letter from the host table, for placeable hosts."""
    hosts = [t for t in sorted_teams if t.is_host]
    assignments = host_group_assignments(len(hosts), available_groups)
    return {
        host.name: group_name
        for host, group_name in zip(hosts, assignments)
        if group_name in available_groups
    }


def place_hosts(groups: Groups, sorted_teams: list[Team],
                available_groups: list[str] | None = None) -> Groups:
    """Put each host into the first empty slot of its table-assigned group.

    Mutates and returns ``groups``.
    """
    hosts = [t for t in sorted_teams if t.is_host]
    if available_groups is None:
        available_groups = list(groups)
    assignments = host_group_assignments(len(hosts), available_groups)

    for index, host in enumerate(hosts):
        if index >= len(assignments):
            print(f"  Warning: no host group for {host.name} "
                  f"({len(hosts)} hosts, at most 6 supported)")
            continue
        group_name = assignments[index]
        slots = groups.get(group_name)
        if slots is None:
            print(f"  Warning: host {host.name} assigned to missing "
                  f"group {group_name}")
            continue
        slot = _first_empty(slots)
        if slot != -1:
            slots[slot] = host
    return groups


def perform_standard_draw(pots: dict[str, list[Team]],
                          sorted_teams: list[Team],
                          empty_groups: Groups,
                          number_of_groups: int,
                          rng: random.Random | None = None) -> DrawResult:
    """Hosts first, then each pot shuffled and dealt to groups in order.

    A pot smaller than the group count prefers groups that do not hold a
    host from that same pot; if that leaves too few groups, the last
    groups make up the difference.
    """
    rng = rng or random.Random()
    groups = place_hosts(_copy_groups(empty_groups), sorted_teams)
    all_groups = list(groups)

    for pot_key, pot_teams in pots.items():
        shuffled = shuffle([t for t in pot_teams if not t.is_host], rng)

        if len(shuffled) >= number_of_groups:
            targets = [g for g in all_groups if None in groups[g]]
        else:
            pot_hosts = {t.name for t in pot_teams if t.is_host}
            host_groups = {
                g for g in all_groups
                if any(t is not None and t.name in pot_hosts for t in groups[g])
            }
            available = [
                g for g in all_groups
                if g not in host_groups and None in groups[g]
            ]
            needed = len(shuffled)
            if len(available) >= needed:
                targets = available[:needed]
            else:
                targets = list(available)
                remaining = needed - len(available)
                for g in all_groups[number_of_groups - remaining:number_of_groups]:
                    if g not in targets and None in groups[g]:
                        targets.append(g)

        for team, group_name in zip(shuffled, targets):
            slot = _first_empty(groups[group_name])
            if slot != -1:
                groups[group_name][slot] = team

    return DrawResult(True, groups)


def perform_world_cup_draw(pots: dict[str, list[Team]],
                           sorted_teams: list[Team],
                           empty_groups: Groups,
                           group_structure: dict[str, int],
                           registry: NationRegistry,
                           rng: random.Random | None = None) -> DrawResult:
    """Championship draw with confederation constraints.

    On failure returns success=False with only hosts and Pot 1 placed.
    """
    rng = rng or random.Random()
    groups = place_hosts(_copy_groups(empty_groups), sorted_teams,
                         available_groups=list(group_structure))
    pot_keys = list(pots)

    if pot_keys:
        pot1 = shuffle([t for t in pots[pot_keys[0]] if not t.is_host], rng)
        needing = [g for g, slots in groups.items() if slots and slots[0] is None]
        for team, group_name in zip(pot1, needing):
            groups[group_name][0] = team
        print(f"  {pot_keys[0]}: {min(len(pot1), len(needing))} teams dealt "
              f"to {len(needing)} open groups")

    remaining = pot_keys[1:]
    result = assign_pots_with_backtracking(remaining, pots, groups, registry,
                                           0, rng)
    if not result.success:
        print(f"  No valid assignment for {', '.join(remaining)}; "
              f"keeping hosts and {pot_keys[0]} only")
        return DrawResult(False, groups)

    if remaining:
        print(f"  {', '.join(remaining)} placed under confederation constraints")
    return result


def candidate_orderings(teams: list[Team], rng: random.Random) -> list[list[Team]]:
    """Up to min(20, 3 * len(teams)) random orderings of a pot."""
    count = min(MAX_CANDIDATE_ORDERINGS, len(teams) * 3)
    return [shuffle(teams, rng) for _ in range(count)]


def assign_pots_with_backtracking(pot_keys: list[str],
                                  pots: dict[str, list[Team]],
                                  groups: Groups,
                                  registry: NationRegistry,
                                  pot_index: int = 0,
                                  rng: random.Random | None = None) -> DrawResult:
    """Place pot_keys[pot_index:] in order, backtracking across pots.

    pot_keys[i] fills slot position i + 1 (slot 0 belongs to Pot 1).
    A failure at any depth is reported all the way up.
    """
    if pot_index >= len(pot_keys):
        return DrawResult(True, groups)

    rng = rng or random.Random()
    pot_teams = [t for t in pots.get(pot_keys[pot_index], []) if not t.is_host]
    if not pot_teams:
        return assign_pots_with_backtracking(pot_keys, pots, groups, registry,
                                             pot_index + 1, rng)

    position = pot_index + 1
    for order in candidate_orderings(pot_teams, rng):
        placed = assign_pot_teams_to_groups(order, groups, position, registry)
        if not placed.success:
            continue
        result = assign_pots_with_backtracking(pot_keys, pots, placed.groups,
                                               registry, pot_index + 1, rng)
        if result.success:
            return result

    return DrawResult(False, groups)


def assign_pot_teams_to_groups(teams: list[Team], groups: Groups,
                               position: int,
                               registry: NationRegistry) -> DrawResult:
    """Place every team of one pot at slot ``position``, one per group.

    Backtracks over group choices for the given team order. Works on a
    copy; the input groups are never modified.
    """
    trial = _copy_groups(groups)
    available = [
        g for g, slots in trial.items()
        if position < len(slots) and slots[position] is None
    ]
    if len(available) < len(teams):
        return DrawResult(False, trial)

    used: set[str] = set()

    def place(team_index: int) -> bool:
        if team_index >= len(teams):
            return True
        team = teams[team_index]
        for group_name in available:
            if group_name in used:
                continue
            if not can_place_team_in_group(team, trial[group_name], position,
                                           registry):
                continue
            trial[group_name][position] = team
            used.add(group_name)
            if place(team_index + 1):
                return True
            trial[group_name][position] = None
            used.discard(group_name)
        return False

    return DrawResult(place(0), trial)


def can_place_team_in_group(team: Team, slots: list[Optional[Team]],
                            position: int, registry: NationRegistry) -> bool:
    """Confederation rule for adding ``team`` to a group at ``position``.

    Non-UEFA: no other team from the same confederation in slots 0..position.
    UEFA: fewer than two UEFA teams already in those slots.
    """
    confederation = registry.confederation(team)
    is_uefa = registry.is_uefa(team)

    uefa_count = 0
    for other in slots[:position + 1]:
        if other is None:
            continue
        if not is_uefa and registry.confederation(other) == confederation:
            return False
        if registry.is_uefa(other):
            uefa_count += 1

    if is_uefa and uefa_count >= MAX_UEFA_PER_GROUP:
        return False
    return True


def run_draw(setup: dict, registry: NationRegistry,
             seed: int | None = None) -> dict:
    """Run a full draw from a loaded draw setup.

    Returns dict with:
    - result: DrawResult
    - sorted_teams: teams in pot order
    - pots: pot name -> teams
    - structure: group name -> capacity
    - hosts: host name -> group the host table puts it in
    """
    rng = random.Random(seed)
    competition = setup["competition"]
    number_of_groups = competition["num_groups"]

    sorted_teams = sort_teams_by_ranking(setup["teams"], registry)
    pots = allocate_pots(sorted_teams, number_of_groups)
    structure = calculate_group_structure(pots, number_of_groups)
    empty_groups = build_empty_groups(structure)

    if competition["format"] == "championship":
        result = perform_world_cup_draw(pots, sorted_teams, empty_groups,
                                        structure, registry, rng)
    else:
        result = perform_standard_draw(pots, sorted_teams, empty_groups,
                                       number_of_groups, rng)

    return {
        "result": result,
        "sorted_teams": sorted_teams,
        "pots": pots,
        "structure": structure,
        "hosts": expected_host_groups(sorted_teams, list(structure)),
    }
