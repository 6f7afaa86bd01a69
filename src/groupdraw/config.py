"""Config loading and validation: nation registry, draw setups, competition imports."""

import json
from pathlib import Path

import yaml

from groupdraw.models import CONFEDERATIONS, Competition, Team
from groupdraw.pots import is_playoff_slot_id
from groupdraw.registry import NationRegistry
from groupdraw.roundrobin import supports_group_stage

REQUIRED_COMPETITION_FIELDS = ("compName", "numTeams", "numThrough", "compType")
PRESET_TYPES = ("competition", "manual", "confederation")
DRAW_FORMATS = ("championship", "standard")


class CompetitionImportError(ValueError):
    """A competition file was rejected; nothing was imported."""


def load_registry(path: str | Path) -> NationRegistry:
    """Load the nation registry (YAML or JSON, same mapping shape)."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"Nation registry {path} must be a mapping of name -> data")
    return NationRegistry.from_raw(raw)


def load_draw_config(path: str | Path) -> dict:
    """Load and validate a draw setup YAML, returning structured data.

    Returns dict with:
    - competition: {name, num_groups, num_through, preset, format, confederation}
    - teams: list[Team] in file order (registry order for a confederation
      preset with no team list)
    - registry: NationRegistry (if the setup names one, else empty)
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    comp_raw = raw.get("competition", {})
    name = str(comp_raw.get("name", "draw"))
    num_groups = int(comp_raw.get("num_groups", 0))
    preset = comp_raw.get("preset", "competition")
    confederation = comp_raw.get("confederation")
    draw_format = comp_raw.get(
        "format", "championship" if name == "World Cup" else "standard"
    )

    if num_groups <= 0:
        raise ValueError(f"{path}: competition.num_groups must be positive")
    if preset not in PRESET_TYPES:
        raise ValueError(f"{path}: unknown preset {preset!r} "
                         f"(expected one of {', '.join(PRESET_TYPES)})")
    if draw_format not in DRAW_FORMATS:
        raise ValueError(f"{path}: unknown format {draw_format!r} "
                         f"(expected one of {', '.join(DRAW_FORMATS)})")
    if preset == "confederation" and confederation not in CONFEDERATIONS:
        raise ValueError(f"{path}: preset confederation needs "
                         f"competition.confederation "
                         f"(one of {', '.join(CONFEDERATIONS)})")

    competition = {
        "name": name,
        "num_groups": num_groups,
        "num_through": int(comp_raw.get("num_through", 0)),
        "preset": preset,
        "format": draw_format,
        "confederation": confederation,
    }

    registry = NationRegistry()
    if raw.get("registry"):
        registry_path = Path(raw["registry"])
        if not registry_path.is_absolute():
            registry_path = path.parent / registry_path
        registry = load_registry(registry_path)

    if preset == "confederation" and "teams" not in raw:
        teams = confederation_teams(registry, confederation)
    else:
        teams = []
        for i, entry in enumerate(raw.get("teams") or []):
            if isinstance(entry, str):
                entry = {"name": entry}
            team_name = str(entry.get("name", "")).strip()
            if not team_name:
                continue
            slot_id = str(entry.get("slot", f"team-{i}"))
            teams.append(Team(
                name=team_name,
                slot_id=slot_id,
                is_host=bool(entry.get("host", False)),
                # Playoff slots only exist for real competition presets
                is_playoff_slot=preset == "competition" and is_playoff_slot_id(slot_id),
            ))

    # Validate
    errors = []
    seen = set()
    for team in teams:
        if team.name in seen:
            errors.append(f"Team {team.name} listed more than once")
        seen.add(team.name)
        if len(registry) and team.name not in registry:
            errors.append(f"Team {team.name} not in nation registry")
        elif preset == "competition" and team.name in registry:
            slot_error = slot_eligibility_error(team, registry)
            if slot_error:
                errors.append(slot_error)

    if preset == "confederation" and not teams:
        errors.append(f"No {confederation} nations to draw")

    num_hosts = sum(1 for t in teams if t.is_host)
    if num_hosts > 6:
        errors.append(f"{num_hosts} hosts listed; host placement supports at most 6")

    if errors:
        print("Config validation errors:")
        for e in errors:
            print(f"  {e}")

    return {
        "competition": competition,
        "teams": teams,
        "registry": registry,
    }


def confederation_teams(registry: NationRegistry, confederation: str) -> list[Team]:
    """Every registry nation of one confederation, in registry order."""
    return [
        Team(name=nation, slot_id=f"confed-{nation}")
        for nation in registry.names()
        if registry.confederation(nation) == confederation
    ]


def slot_eligibility_error(team: Team, registry: NationRegistry) -> str | None:
    """Check a competition slot holds a nation it accepts.

    euro-* slots take UEFA nations, intl-* slots take non-UEFA nations and
    <comp>-<CONF>-<i> slots take nations of that confederation.
    """
    confederation = registry.confederation(team)
    parts = team.slot_id.split("-")
    if parts[0] == "euro" and not registry.is_uefa(team):
        return (f"Team {team.name} ({confederation}) not allowed in UEFA "
                f"playoff slot {team.slot_id}")
    if parts[0] == "intl" and registry.is_uefa(team):
        return (f"Team {team.name} (UEFA) not allowed in intercontinental "
                f"playoff slot {team.slot_id}")
    if len(parts) == 3 and parts[1] in CONFEDERATIONS and confederation != parts[1]:
        return (f"Team {team.name} ({confederation}) not allowed in "
                f"{parts[1]} slot {team.slot_id}")
    return None


def parse_competition(data) -> Competition:
    """Validate an imported competition object.

    Checks run in order: required fields, competition type, groups.
    Raises CompetitionImportError; no partial result is produced.
    """
    if not isinstance(data, dict):
        raise CompetitionImportError("Import failed: Invalid JSON file")

    missing = [f for f in REQUIRED_COMPETITION_FIELDS if f not in data]
    if missing:
        raise CompetitionImportError(
            f"Import failed: Missing required fields: {', '.join(missing)}"
        )

    if not supports_group_stage(data["compType"]):
        raise CompetitionImportError(
            "Import failed: Competition type does not support group stage scheduling"
        )

    groups = data.get("groups")
    if not groups or not isinstance(groups, dict):
        raise CompetitionImportError("Import failed: Invalid or missing groups data")

    return Competition(
        comp_name=str(data["compName"]),
        num_teams=data["numTeams"],
        num_through=data["numThrough"],
        comp_type=data["compType"],
        groups={str(g): [str(t) for t in (teams or [])] for g, teams in groups.items()},
    )


def load_competition(path: str | Path) -> Competition:
    """Load a competition import file (JSON)."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CompetitionImportError("Import failed: Invalid JSON file") from e
    return parse_competition(data)
