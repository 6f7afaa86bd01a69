"""Standalone verifier for exported draws.

Validates a draw export (or any competition file) against the placement
rules using a nation registry.
Usage: groupdraw-verify <draw.json> [nations.yaml]
"""

import sys
from pathlib import Path

from groupdraw.config import CompetitionImportError, load_competition, load_registry
from groupdraw.constraints import format_validation_report, validate_draw


def verify_file(draw_path: str | Path, registry_path: str | Path) -> dict:
    """Load a draw export and registry, and validate the groups."""
    competition = load_competition(draw_path)
    registry = load_registry(registry_path)
    return validate_draw(competition.groups, registry)


def main():
    if len(sys.argv) < 2:
        print("Usage: groupdraw-verify <draw.json> [nations.yaml]")
        print("  Validates an exported draw against the confederation rules.")
        sys.exit(1)

    draw_path = sys.argv[1]
    registry_path = sys.argv[2] if len(sys.argv) > 2 else "nations.yaml"

    if not Path(draw_path).exists():
        print(f"Error: {draw_path} not found")
        sys.exit(1)
    if not Path(registry_path).exists():
        print(f"Error: {registry_path} not found")
        sys.exit(1)

    print(f"Verifying draw from {draw_path} against {registry_path}...")
    try:
        result = verify_file(draw_path, registry_path)
    except CompetitionImportError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(format_validation_report(result))
    sys.exit(0 if result["valid"] else 1)


if __name__ == "__main__":
    main()
