"""Pre-draw preparation: ranking tiers, pot allocation, group structure."""

import string
from typing import Optional

from groupdraw.models import PLAYOFF_SLOT_PREFIXES, Team
from groupdraw.registry import NationRegistry


def is_playoff_slot_id(slot_id: str) -> bool:
    """True for slot ids like 'euro-0' or 'intl-1'."""
    return slot_id.split("-")[0] in PLAYOFF_SLOT_PREFIXES


def sort_teams_by_ranking(teams: list[Team],
                          registry: NationRegistry) -> list[Team]:
    """Order teams as [hosts, regular, playoff slots].

    Each tier is stably sorted by descending ranking points.
    """
    hosts = [t for t in teams if t.is_host]
    regular = [t for t in teams if not t.is_host and not t.is_playoff_slot]
    playoff = [t for t in teams if not t.is_host and t.is_playoff_slot]

    def by_ranking(tier: list[Team]) -> list[Team]:
        return sorted(tier, key=lambda t: -registry.ranking(t))

    return by_ranking(hosts) + by_ranking(regular) + by_ranking(playoff)


def allocate_pots(sorted_teams: list[Team],
                  number_of_groups: int) -> dict[str, list[Team]]:
    """Chunk ranked teams into pots of number_of_groups (last pot may be short)."""
    pots: dict[str, list[Team]] = {}
    if number_of_groups <= 0 or not sorted_teams:
        return pots

    for index, start in enumerate(range(0, len(sorted_teams), number_of_groups)):
        pots[f"Pot {index + 1}"] = list(sorted_teams[start:start + number_of_groups])
    return pots


def group_names(number_of_groups: int) -> list[str]:
    """'A', 'B', ... for the given number of groups."""
    letters = string.ascii_uppercase
    return [letters[i] if i < 26 else f"{letters[i // 26 - 1]}{letters[i % 26]}"
            for i in range(number_of_groups)]


def calculate_group_structure(pots: dict[str, list[Team]],
                              number_of_groups: int) -> dict[str, int]:
    """Group capacities derived from the pots.

    A full pot adds one slot to every group; a partial pot of K teams
    adds one slot to each of the last K groups.
    """
    if not pots:
        return {}

    structure = {name: 0 for name in group_names(number_of_groups)}
    names = list(structure)
    for pot_teams in pots.values():
        if len(pot_teams) >= number_of_groups:
            for name in names:
                structure[name] += 1
        else:
            for name in names[number_of_groups - len(pot_teams):]:
                structure[name] += 1
    return structure


def build_empty_groups(structure: dict[str, int]) -> dict[str, list[Optional[Team]]]:
    return {name: [None] * capacity for name, capacity in structure.items()}


def host_group_assignments(num_hosts: int, available_groups: list[str]) -> list[str]:
    """Fixed host -> group letter table, spreading hosts across the bracket.

    Letters missing from available_groups fall back to an earlier letter.
    Supports at most 6 hosts; anything else gets no assignments.
    """
    def pick(preferred: str, fallback: str) -> str:
        return preferred if preferred in available_groups else fallback

    if num_hosts == 1:
        return ["A"]
    if num_hosts == 2:
        return ["A", "B"]
    if num_hosts == 3:
        return ["A", "B", pick("D", "C")]
    if num_hosts == 4:
        return ["A", "B", "D", pick("F", "C")]
    if num_hosts == 5:
        return ["A", "B", "D", "F", pick("I", "C")]
    if num_hosts == 6:
        return ["A", "B", "D", "F", pick("I", "C"), pick("J", "E")]
    return []
