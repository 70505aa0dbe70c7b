"""Tests for teammate/team_models.py."""

from teammate.participant_models import Game, Participant, Role
from teammate.personality_types import PersonalityType
from teammate.team_models import AllocationResult, Team
from pydantic import ValidationError
import pytest


def _p(pid: str, game: Game = Game.CHESS, role: Role = Role.ATTACKER, skill: int = 5, score: int = 75) -> Participant:
    return Participant(
        id=pid,
        name=f"Member {pid}",
        email=f"{pid.lower()}@club.org",
        game=game,
        skill_level=skill,
        role=role,
        personality_score=score,
    )


class TestTeam:
    def test_empty_team(self):
        team = Team(team_id=1)
        assert team.size == 0
        assert team.average_skill() == 0.0
        assert team.role_diversity() == 0
        assert team.count_of_activity(Game.FIFA) == 0
        assert not team.has_personality_type(PersonalityType.LEADER)

    def test_team_id_must_be_positive(self):
        with pytest.raises(ValidationError):
            Team(team_id=0)

    def test_add_member_preserves_order(self):
        team = Team(team_id=1)
        for pid in ["P3", "P1", "P2"]:
            team.add_member(_p(pid))
        assert [m.id for m in team.members] == ["P3", "P1", "P2"]
        assert team.size == 3

    def test_average_skill(self):
        team = Team(team_id=1, members=[_p("A", skill=4), _p("B", skill=7), _p("C", skill=10)])
        assert team.average_skill() == pytest.approx(7.0)

    def test_role_diversity(self):
        team = Team(team_id=1, members=[
            _p("A", role=Role.ATTACKER),
            _p("B", role=Role.ATTACKER),
            _p("C", role=Role.DEFENDER),
        ])
        assert team.role_diversity() == 2
        assert team.has_role(Role.DEFENDER)
        assert not team.has_role(Role.COORDINATOR)

    def test_activity_counts(self):
        team = Team(team_id=1, members=[
            _p("A", game=Game.FIFA),
            _p("B", game=Game.FIFA),
            _p("C", game=Game.VALORANT),
        ])
        assert team.count_of_activity(Game.FIFA) == 2
        assert team.count_of_activity(Game.CHESS) == 0
        assert team.activity_counts() == {Game.FIFA: 2, Game.VALORANT: 1}

    def test_has_personality_type(self):
        team = Team(team_id=1, members=[_p("A", score=95), _p("B", score=60)])
        assert team.has_personality_type(PersonalityType.LEADER)
        assert team.has_personality_type(PersonalityType.THINKER)
        assert not team.has_personality_type(PersonalityType.BALANCED)

    def test_no_size_enforcement(self):
        team = Team(team_id=1)
        for i in range(12):
            team.add_member(_p(f"P{i}"))
        assert team.size == 12


class TestAllocationResult:
    def test_find_team_for(self):
        result = AllocationResult(
            teams=[
                Team(team_id=1, members=[_p("A"), _p("B")]),
                Team(team_id=2, members=[_p("C"), _p("D")]),
            ],
            leftovers=[_p("E")],
        )
        team = result.find_team_for("D")
        assert team is not None
        assert team.team_id == 2
        assert result.find_team_for("E") is None
        assert result.find_team_for("missing") is None

    def test_totals(self):
        result = AllocationResult(
            teams=[Team(team_id=1, members=[_p("A"), _p("B")])],
            leftovers=[_p("C")],
        )
        assert result.total_participants == 3
        assert [p.id for p in result.assigned_participants()] == ["A", "B"]

    def test_empty_result(self):
        result = AllocationResult()
        assert result.total_participants == 0
        assert result.assigned_participants() == []
