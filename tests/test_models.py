"""Tests for models.py and registry.py — data classes and nation lookup."""

import dataclasses

import pytest

from groupdraw.models import (
    DrawResult, Match, Nation, Team, group_team_names,
)
from groupdraw.registry import NationRegistry


class TestMatch:
    def test_reversed(self):
        m = Match("A", "B")
        assert m.reversed() == Match("B", "A")
        assert m == Match("A", "B")


class TestTeam:
    def test_defaults(self):
        t = Team("Spain")
        assert t.slot_id == ""
        assert not t.is_host
        assert not t.is_playoff_slot

    def test_immutable(self):
        t = Team("Spain")
        with pytest.raises(dataclasses.FrozenInstanceError):
            t.name = "France"


class TestDrawResult:
    def test_team_names_drop_empty(self):
        result = DrawResult(True, {"A": [Team("X"), None], "B": [None, Team("Y")]})
        assert group_team_names(result.groups) == {"A": ["X"], "B": ["Y"]}

    def test_group_team_names(self):
        assert group_team_names({"A": [None]}) == {"A": []}


class TestNationRegistry:
    def test_from_raw(self):
        registry = NationRegistry.from_raw({
            "Japan": {"rankingPts": 1650, "confederationID": "AFC", "flagCode": "jp"},
            "Spain": {"rankingPts": 1877, "confederationID": "UEFA"},
        })
        assert len(registry) == 2
        assert "Japan" in registry
        assert registry.get("Japan") == Nation(1650, "AFC", "jp")
        assert registry.get("Spain").flag_code == ""
        assert registry.is_uefa("Spain")
        assert not registry.is_uefa(Team("Japan"))

    def test_unknown(self):
        registry = NationRegistry()
        assert registry.get("Nowhere") is None
        assert registry.ranking("Nowhere") == 0
        assert registry.confederation(Team("Nowhere")) == ""

    def test_names(self):
        registry = NationRegistry({"A": Nation(1, "X"), "B": Nation(2, "Y")})
        assert registry.names() == ["A", "B"]
