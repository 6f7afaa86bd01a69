"""Read-only nation registry: team name -> ranking, confederation, flag."""

from groupdraw.models import Nation, Team, UEFA


class NationRegistry:
    """Lookup of nation reference data by team name.

    Unknown names have ranking 0 and an empty confederation.
    """

    def __init__(self, nations: dict[str, Nation] | None = None):
        self._nations = dict(nations or {})

    @classmethod
    def from_raw(cls, raw: dict) -> "NationRegistry":
        """Build from the registry file shape:
        {name: {rankingPts, confederationID, flagCode}}.
        """
        nations = {}
        for name, data in (raw or {}).items():
            nations[str(name)] = Nation(
                ranking_pts=float(data.get("rankingPts", 0) or 0),
                confederation=str(data.get("confederationID", "") or ""),
                flag_code=str(data.get("flagCode", "") or ""),
            )
        return cls(nations)

    def __contains__(self, name: str) -> bool:
        return name in self._nations

    def __len__(self) -> int:
        return len(self._nations)

    def get(self, name: str) -> Nation | None:
        return self._nations.get(name)

    def names(self) -> list[str]:
        return list(self._nations)

    def ranking(self, team: Team | str) -> float:
        nation = self._nations.get(_name(team))
        return nation.ranking_pts if nation else 0

    def confederation(self, team: Team | str) -> str:
        nation = self._nations.get(_name(team))
        return nation.confederation if nation else ""

    def is_uefa(self, team: Team | str) -> bool:
        return self.confederation(team) == UEFA


def _name(team: Team | str) -> str:
    return team if isinstance(team, str) else team.name
