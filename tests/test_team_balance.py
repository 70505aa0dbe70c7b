"""Tests for teammate/engine/team_balance.py."""

from teammate.engine.team_balance import (
    calculate_blau_index,
    calculate_formation_balance,
    calculate_team_balance,
)
from teammate.participant_models import Game, Participant, Role
from teammate.team_models import AllocationResult, Team


def _p(pid: str, role: Role, game: Game = Game.CHESS, skill: int = 5, score: int = 80) -> Participant:
    return Participant(
        id=pid,
        name=f"M{pid}",
        email=f"{pid}@club.org",
        game=game,
        skill_level=skill,
        role=role,
        personality_score=score,
    )


class TestBlauIndex:
    def test_empty_list_returns_zero(self):
        assert calculate_blau_index([]) == 0.0

    def test_all_same_returns_zero(self):
        assert calculate_blau_index(["a", "a", "a"]) == 0.0

    def test_two_equal_groups(self):
        # Blau = 1 - (0.5² + 0.5²) = 0.5
        assert abs(calculate_blau_index(["a", "b", "a", "b"]) - 0.5) < 0.001


class TestTeamBalance:
    def test_empty_team(self):
        result = calculate_team_balance(Team(team_id=1))
        assert result.diversity_score == 0.0
        # Still returns 3 dimension distributions, all with zero counts
        assert len(result.distributions) == 3
        assert result.warnings == []
        assert len(result.missing_roles) == 5

    def test_identical_members(self):
        team = Team(team_id=1, members=[_p(f"m{i}", Role.ATTACKER) for i in range(4)])
        result = calculate_team_balance(team)
        assert result.diversity_score == 0.0
        assert any("Duplicate roles: Attacker" in w for w in result.warnings)
        assert any("4 members prefer Chess" in w for w in result.warnings)
        assert any("no Leader" in w for w in result.warnings)

    def test_diverse_team_scores_higher(self):
        diverse = Team(team_id=1, members=[
            _p("a", Role.ATTACKER, Game.CHESS, score=95),
            _p("b", Role.DEFENDER, Game.FIFA, score=80),
            _p("c", Role.STRATEGIST, Game.VALORANT, score=60),
        ])
        uniform = Team(team_id=2, members=[
            _p("d", Role.ATTACKER, Game.CHESS),
            _p("e", Role.ATTACKER, Game.CHESS),
            _p("f", Role.ATTACKER, Game.CHESS),
        ])
        assert calculate_team_balance(diverse).diversity_score > calculate_team_balance(uniform).diversity_score

    def test_counts_filled_for_every_value(self):
        team = Team(team_id=3, members=[_p("a", Role.SUPPORTER, Game.CSGO)])
        result = calculate_team_balance(team)
        role_dist = next(d for d in result.distributions if d.dimension_name == "role")
        assert set(role_dist.counts) == {r.value for r in Role}
        assert role_dist.counts["Supporter"] == 1
        assert "Supporter" not in result.missing_roles

    def test_leader_present_no_leader_warning(self):
        team = Team(team_id=1, members=[
            _p("a", Role.ATTACKER, Game.CHESS, score=92),
            _p("b", Role.DEFENDER, Game.FIFA),
        ])
        result = calculate_team_balance(team)
        assert result.warnings == []

    def test_wide_skill_spread_warning(self):
        team = Team(team_id=1, members=[
            _p("a", Role.ATTACKER, Game.CHESS, skill=1, score=92),
            _p("b", Role.DEFENDER, Game.FIFA, skill=9),
        ])
        result = calculate_team_balance(team)
        assert any("skill spread" in w for w in result.warnings)


class TestFormationBalance:
    def test_skill_gap(self):
        result = AllocationResult(teams=[
            Team(team_id=1, members=[_p("a", Role.ATTACKER, skill=4), _p("b", Role.DEFENDER, skill=6)]),
            Team(team_id=2, members=[_p("c", Role.ATTACKER, skill=8), _p("d", Role.DEFENDER, skill=8)]),
        ])
        balance = calculate_formation_balance(result)
        assert len(balance.teams) == 2
        assert balance.skill_gap == 3.0

    def test_no_teams(self):
        balance = calculate_formation_balance(AllocationResult())
        assert balance.teams == []
        assert balance.skill_gap == 0.0
