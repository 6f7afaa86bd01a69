"""Data models for the group draw and match scheduling app."""

from dataclasses import dataclass, field
from typing import Optional


UEFA = "UEFA"
MAX_UEFA_PER_GROUP = 2

SUPPORTED_COMP_TYPES = ("GROUPKO", "GROUPHA", "GROUP")
HOME_AWAY_COMP_TYPE = "GROUPHA"
EXPORT_COMP_TYPE = "GROUPKO"

CONFEDERATIONS = ("AFC", "CAF", "CONCACAF", "CONMEBOL", "OFC", "UEFA")

# Slot ids look like "euro-0" or "intl-1" for playoff qualifiers
PLAYOFF_SLOT_PREFIXES = ("intl", "euro")


@dataclass(frozen=True)
class Nation:
    """Registry record for one national team."""
    ranking_pts: float
    confederation: str
    flag_code: str = ""


@dataclass(frozen=True)
class Team:
    """A team entered into a draw.

    Ranking and confederation are looked up in the nation registry by name.
    """
    name: str
    slot_id: str = ""
    is_host: bool = False
    is_playoff_slot: bool = False


@dataclass
class Match:
    """A fixture: home team hosts away team."""
    home_team: str
    away_team: str

    def reversed(self) -> "Match":
        return Match(self.away_team, self.home_team)


@dataclass
class DrawResult:
    """Outcome of a draw: group name -> slots indexed by pot position."""
    success: bool
    groups: dict[str, list[Optional[Team]]] = field(default_factory=dict)


@dataclass
class Placement:
    """A single (team, group, position) step of a draw reveal."""
    team: Team
    group: str
    position: int


@dataclass
class Competition:
    """An imported competition file ready for scheduling."""
    comp_name: str
    num_teams: int
    num_through: int
    comp_type: str
    groups: dict[str, list[str]]


def group_team_names(groups: dict[str, list[Optional[Team]]]) -> dict[str, list[str]]:
    """Drop empty slots and reduce each group to its team names."""
    return {
        name: [t.name for t in slots if t is not None]
        for name, slots in groups.items()
    }
