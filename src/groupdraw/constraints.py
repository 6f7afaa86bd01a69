"""Constraint validation for a finished draw.

Accepts either in-memory draw groups (Team slots) or team-name lists
re-imported from an export file.
"""

from collections import defaultdict

from groupdraw.models import MAX_UEFA_PER_GROUP, UEFA, Team
from groupdraw.registry import NationRegistry


def _slot_name(slot) -> str | None:
    if slot is None:
        return None
    if isinstance(slot, Team):
        return slot.name
    return str(slot)


def validate_draw(groups: dict[str, list], registry: NationRegistry,
                  hosts: dict[str, str] | None = None) -> dict:
    """Validate draw groups against the placement rules.

    ``hosts`` optionally maps host team name -> expected group.

    Returns dict with:
    - valid: bool (True if no hard constraint violations)
    - errors: list of hard constraint violations
    - warnings: list of soft issues (unknown nations, empty slots)
    """
    errors = []
    warnings = []

    team_groups: dict[str, list[str]] = defaultdict(list)

    for group_name, slots in groups.items():
        names = [_slot_name(s) for s in slots]
        placed = [n for n in names if n is not None]

        empty = len(names) - len(placed)
        if empty:
            warnings.append(f"Group {group_name} has {empty} empty slot(s)")

        for name in placed:
            team_groups[name].append(group_name)
            if name not in registry:
                warnings.append(f"{name} (group {group_name}) not in nation registry")

        uefa = [n for n in placed if registry.is_uefa(n)]
        if len(uefa) > MAX_UEFA_PER_GROUP:
            errors.append(
                f"Group {group_name} has {len(uefa)} UEFA teams "
                f"({', '.join(uefa)}), max is {MAX_UEFA_PER_GROUP}"
            )

        by_confederation: dict[str, list[str]] = defaultdict(list)
        for name in placed:
            confederation = registry.confederation(name)
            if confederation and confederation != UEFA:
                by_confederation[confederation].append(name)
        for confederation, members in sorted(by_confederation.items()):
            if len(members) > 1:
                errors.append(
                    f"Group {group_name} has {len(members)} {confederation} "
                    f"teams ({', '.join(members)})"
                )

    for name, group_list in sorted(team_groups.items()):
        if len(group_list) > 1:
            errors.append(
                f"{name} placed {len(group_list)} times "
                f"(groups {', '.join(group_list)})"
            )

    for host, expected in (hosts or {}).items():
        actual = team_groups.get(host, [])
        if expected not in actual:
            where = ", ".join(actual) if actual else "nowhere"
            errors.append(f"Host {host} expected in group {expected}, found in {where}")

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def format_validation_report(result: dict) -> str:
    """Format validation results as text."""
    lines = []
    lines.append("=" * 60)
    lines.append("DRAW VALIDATION REPORT")
    lines.append("=" * 60)

    if result["valid"]:
        lines.append("\nRESULT: VALID (no constraint violations)")
    else:
        lines.append(f"\nRESULT: INVALID ({len(result['errors'])} violations)")

    if result["errors"]:
        lines.append(f"\n--- ERRORS ({len(result['errors'])}) ---")
        for e in result["errors"]:
            lines.append(f"  ERROR: {e}")

    if result["warnings"]:
        lines.append(f"\n--- WARNINGS ({len(result['warnings'])}) ---")
        for w in result["warnings"]:
            lines.append(f"  WARN: {w}")

    return "\n".join(lines)
