"""Output formatters: pots, groups, schedules, draw export, reveal playback."""

import json
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from groupdraw.models import (
    EXPORT_COMP_TYPE, Match, Placement, Team, group_team_names,
)
from groupdraw.registry import NationRegistry
from groupdraw.roundrobin import matches_by_matchday, total_matchdays


def format_pots(pots: dict[str, list[Team]], registry: NationRegistry) -> str:
    """Format pots as text, one team per line with confederation and ranking."""
    lines = []
    for pot_key, pot_teams in pots.items():
        lines.append(f"\n{pot_key} ({len(pot_teams)})")
        for t in pot_teams:
            tags = []
            if t.is_host:
                tags.append("host")
            if t.is_playoff_slot:
                tags.append("playoff")
            tag = f"  [{', '.join(tags)}]" if tags else ""
            lines.append(
                f"  {t.name:<22} {registry.confederation(t):<9} "
                f"{registry.ranking(t):>8.2f}{tag}"
            )
    return "\n".join(lines)


def format_groups(groups: dict[str, list[Optional[Team]]],
                  registry: NationRegistry | None = None) -> str:
    """Format draw groups as text, slot by slot."""
    lines = []
    for group_name, slots in groups.items():
        lines.append(f"\nGroup {group_name}")
        for position, team in enumerate(slots, 1):
            if team is None:
                lines.append(f"  {position}. ---")
                continue
            confederation = f"  ({registry.confederation(team)})" if registry else ""
            lines.append(f"  {position}. {team.name}{confederation}")
    return "\n".join(lines)


def format_schedule(schedule: dict[str, dict[int, list[Match]]],
                    title: str = "") -> str:
    """Format a competition schedule as text, organized by matchday."""
    lines = []
    lines.append("=" * 70)
    lines.append(f"{title.upper()} GROUP STAGE SCHEDULE".strip())
    lines.append("=" * 70)

    for matchday in range(1, total_matchdays(schedule) + 1):
        lines.append(f"\n--- MATCHDAY {matchday} ---")
        for group_name, match in matches_by_matchday(schedule, matchday):
            lines.append(
                f"  [{group_name}] {match.home_team:>22} vs {match.away_team}"
            )
    return "\n".join(lines)


def draw_export_data(groups: dict[str, list[Optional[Team]]], comp_name: str,
                     num_through: int) -> dict:
    """Build the draw export object consumed by competition import."""
    names = group_team_names(groups)
    return {
        "compName": comp_name,
        "numTeams": sum(len(v) for v in names.values()),
        "numThrough": num_through,
        "compType": EXPORT_COMP_TYPE,
        "groups": names,
    }


def export_filename(comp_name: str, now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"{now:%Y%m%d%H%M%S}-{comp_name}.json"


def write_draw_export(groups: dict[str, list[Optional[Team]]], comp_name: str,
                      num_through: int, output_dir: str | Path = "output",
                      now: datetime | None = None) -> Path:
    """Write the draw export JSON and return its path."""
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(comp_name, now)
    data = draw_export_data(groups, comp_name, num_through)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n",
                    encoding="utf-8")
    print(f"Written: {path}")
    return path


def playback_order(groups: dict[str, list[Optional[Team]]]) -> list[Placement]:
    """All filled placements, ordered by pot position (stable by group order)."""
    placements = [
        Placement(team=team, group=group_name, position=position)
        for group_name, slots in groups.items()
        for position, team in enumerate(slots)
        if team is not None
    ]
    placements.sort(key=lambda p: p.position)
    return placements


def reveal(groups: dict[str, list[Optional[Team]]], delay: float = 0.03,
           emit: Callable[[Placement], None] | None = None) -> int:
    """Play back a completed draw one placement at a time.

    Purely cosmetic: the draw is already final. Returns placements shown.
    """
    if emit is None:
        def emit(p: Placement) -> None:
            print(f"  Pot {p.position + 1}: {p.team.name} -> Group {p.group}",
                  flush=True)

    placements = playback_order(groups)
    for i, placement in enumerate(placements):
        if i and delay > 0:
            time.sleep(delay)
        emit(placement)
    return len(placements)
