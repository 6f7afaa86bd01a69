"""Tests for roundrobin.py — circle-method scheduling and verification."""

from groupdraw.models import Match
from groupdraw.roundrobin import (
    matches_by_matchday,
    schedule_competition,
    schedule_group,
    should_use_home_away,
    supports_group_stage,
    total_matchdays,
    verify_group_schedule,
)


def _pairs(schedule):
    return {
        day: [(m.home_team, m.away_team) for m in matches]
        for day, matches in schedule.items()
    }


class TestScheduleGroup:
    def test_four_teams_single(self):
        schedule = schedule_group(["A", "B", "C", "D"], home_and_away=False)
        # 4 teams => 3 matchdays, 2 matches each
        assert sorted(schedule) == [1, 2, 3]
        for matches in schedule.values():
            assert len(matches) == 2
        result = verify_group_schedule(schedule, ["A", "B", "C", "D"])
        assert result["valid"], result["errors"]
        assert len(result["pair_counts"]) == 6

    def test_four_teams_exact_fixtures(self):
        """Rotation first, then the opening match of even matchdays flipped."""
        schedule = schedule_group(["A", "B", "C", "D"])
        assert _pairs(schedule) == {
            1: [("A", "D"), ("B", "C")],
            2: [("C", "A"), ("D", "B")],
            3: [("A", "B"), ("C", "D")],
        }

    def test_four_teams_home_and_away_exact_fixtures(self):
        """Second leg mirrors the first leg round for round."""
        schedule = schedule_group(["A", "B", "C", "D"], home_and_away=True)
        assert _pairs(schedule) == {
            1: [("A", "D"), ("B", "C")],
            2: [("C", "A"), ("D", "B")],
            3: [("A", "B"), ("C", "D")],
            4: [("D", "A"), ("C", "B")],
            5: [("A", "C"), ("B", "D")],
            6: [("B", "A"), ("D", "C")],
        }

    def test_even_matchdays_flipped_relative_to_rotation(self):
        teams = [f"T{i}" for i in range(6)]
        schedule = schedule_group(teams)
        # Matchday 2 pairs position 0 with the rotated last element, flipped
        first = schedule[2][0]
        assert first.away_team == "T0"
        assert schedule[1][0].home_team == "T0"
        assert schedule[3][0].home_team == "T0"
        # Only the opening match is flipped
        assert (schedule[2][1].home_team, schedule[2][1].away_team) == ("T5", "T3")

    def test_every_team_hosts_in_four_team_group(self):
        schedule = schedule_group(["A", "B", "C", "D"])
        homes = {m.home_team for matches in schedule.values() for m in matches}
        assert homes == {"A", "B", "C", "D"}

    def test_every_pair_plays_once_even(self):
        teams = [f"T{i}" for i in range(8)]
        schedule = schedule_group(teams)
        assert len(schedule) == 7
        result = verify_group_schedule(schedule, teams)
        assert result["valid"], result["errors"]
        for t in teams:
            assert result["games_per_team"][t] == 7

    def test_every_pair_plays_once_odd(self):
        teams = [f"T{i}" for i in range(5)]
        schedule = schedule_group(teams)
        # 5 teams + bye = 6, so 5 matchdays with 2 matches each
        assert len(schedule) == 5
        for matches in schedule.values():
            assert len(matches) == 2
        result = verify_group_schedule(schedule, teams)
        assert result["valid"], result["errors"]

    def test_bye_never_appears(self):
        teams = ["A", "B", "C"]
        for home_away in (False, True):
            schedule = schedule_group(teams, home_and_away=home_away)
            for matches in schedule.values():
                for m in matches:
                    assert m.home_team in teams
                    assert m.away_team in teams

    def test_home_and_away_each_pair_twice_reversed(self):
        for n in range(2, 9):
            teams = [f"T{i}" for i in range(n)]
            schedule = schedule_group(teams, home_and_away=True)
            expected = (n - 1 if n % 2 == 0 else n) * 2
            assert len(schedule) == expected
            result = verify_group_schedule(schedule, teams, home_and_away=True)
            assert result["valid"], result["errors"]

    def test_second_leg_mirrors_first(self):
        teams = [f"T{i}" for i in range(6)]
        schedule = schedule_group(teams, home_and_away=True)
        half = 5
        for day in range(1, half + 1):
            assert schedule[day + half] == [m.reversed() for m in schedule[day]]

    def test_no_team_plays_twice_on_matchday(self):
        teams = [f"T{i}" for i in range(10)]
        for matches in schedule_group(teams, home_and_away=True).values():
            seen = set()
            for m in matches:
                assert m.home_team not in seen
                assert m.away_team not in seen
                seen.update((m.home_team, m.away_team))

    def test_matchday_keys_dense(self):
        schedule = schedule_group([f"T{i}" for i in range(7)], home_and_away=True)
        assert sorted(schedule) == list(range(1, 15))

    def test_two_teams(self):
        schedule = schedule_group(["A", "B"])
        assert _pairs(schedule) == {1: [("A", "B")]}

    def test_two_teams_home_and_away(self):
        schedule = schedule_group(["A", "B"], home_and_away=True)
        assert _pairs(schedule) == {1: [("A", "B")], 2: [("B", "A")]}

    def test_one_team(self):
        assert schedule_group(["A"]) == {}

    def test_empty(self):
        assert schedule_group([]) == {}
        assert schedule_group([], home_and_away=True) == {}

    def test_duplicates_follow_positions(self):
        schedule = schedule_group(["A", "A", "B", "C"])
        assert len(schedule) == 3
        assert sum(len(m) for m in schedule.values()) == 6

    def test_offset_rotates_base_rounds(self):
        teams = ["A", "B", "C", "D"]
        plain = schedule_group(teams)
        shifted = schedule_group(teams, offset=1)
        # Matchday 1 of the shifted schedule is base round 2 (unflipped)
        assert _pairs(shifted)[1] == [("A", "C"), ("D", "B")]
        assert shifted != plain
        result = verify_group_schedule(shifted, teams)
        assert result["valid"], result["errors"]

    def test_deterministic(self):
        teams = ["A", "B", "C", "D", "E", "F"]
        assert schedule_group(teams, True) == schedule_group(teams, True)


class TestScheduleCompetition:
    def test_groups_independent(self):
        groups = {"A": ["A1", "A2", "A3", "A4"], "B": ["B1", "B2", "B3"]}
        schedule = schedule_competition(groups)
        assert list(schedule) == ["A", "B"]
        assert schedule["A"] == schedule_group(groups["A"])
        assert schedule["B"] == schedule_group(groups["B"])

    def test_home_away(self):
        groups = {"A": ["A1", "A2", "A3", "A4"]}
        schedule = schedule_competition(groups, use_home_away=True)
        assert len(schedule["A"]) == 6

    def test_preserves_group_order(self):
        groups = {"C": ["x", "y"], "A": ["p", "q"]}
        assert list(schedule_competition(groups)) == ["C", "A"]

    def test_stagger_keeps_coverage(self):
        groups = {g: [f"{g}{i}" for i in range(4)] for g in "ABCD"}
        schedule = schedule_competition(groups, stagger=True)
        for g, teams in groups.items():
            result = verify_group_schedule(schedule[g], teams)
            assert result["valid"], result["errors"]
        # Group A (index 0) gets offset 1, so it differs from the plain order
        assert schedule["A"] != schedule_group(groups["A"])
        # Group B (index 1) gets offset 2 % 3 = 2
        assert schedule["B"] == schedule_group(groups["B"], offset=2)

    def test_empty(self):
        assert schedule_competition({}) == {}


class TestDerivedQueries:
    def test_matches_by_matchday(self):
        schedule = schedule_competition({
            "A": ["A1", "A2", "A3", "A4"],
            "B": ["B1", "B2"],
        })
        day1 = matches_by_matchday(schedule, 1)
        assert [g for g, _ in day1] == ["A", "A", "B"]
        day2 = matches_by_matchday(schedule, 2)
        assert all(g == "A" for g, _ in day2)
        assert matches_by_matchday(schedule, 99) == []

    def test_total_matchdays(self):
        schedule = schedule_competition({
            "A": ["A1", "A2", "A3", "A4"],
            "B": ["B1", "B2", "B3", "B4", "B5", "B6"],
        })
        assert total_matchdays(schedule) == 5

    def test_total_matchdays_empty(self):
        assert total_matchdays({}) == 0
        assert total_matchdays({"A": {}}) == 0


class TestCompetitionTypes:
    def test_supports_group_stage(self):
        for comp_type in ("GROUPKO", "GROUPHA", "GROUP"):
            assert supports_group_stage(comp_type)
        assert not supports_group_stage("KO")
        assert not supports_group_stage("groupko")

    def test_should_use_home_away(self):
        assert should_use_home_away("GROUPHA")
        assert not should_use_home_away("GROUPKO")
        assert not should_use_home_away("GROUP")


class TestVerifyGroupSchedule:
    def test_detects_missing_pair(self):
        schedule = {
            1: [Match("A", "B")],
            2: [Match("A", "C")],
            3: [],
        }
        result = verify_group_schedule(schedule, ["A", "B", "C"])
        assert not result["valid"]
        assert any("B vs C" in e for e in result["errors"])

    def test_detects_team_twice_on_matchday(self):
        schedule = {
            1: [Match("A", "B"), Match("A", "C")],
            2: [Match("B", "C")],
            3: [],
        }
        result = verify_group_schedule(schedule, ["A", "B", "C"])
        assert not result["valid"]
        assert any("A appears twice" in e for e in result["errors"])

    def test_detects_same_direction_twice(self):
        schedule = {1: [Match("A", "B")], 2: [Match("A", "B")]}
        result = verify_group_schedule(schedule, ["A", "B"], home_and_away=True)
        assert not result["valid"]
        assert any("home and away" in e for e in result["errors"])
