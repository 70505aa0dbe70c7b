"""Team aggregate and allocation result models."""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, Field

from teammate.participant_models import Game, Participant, Role
from teammate.personality_types import PersonalityType


class Team(BaseModel):
    """A group of participants formed in one allocation run.

    Member order is selection order. Size is not enforced here; the
    allocation engine never adds more than the configured team size.
    """

    team_id: int = Field(..., ge=1)
    members: list[Participant] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)

    def add_member(self, participant: Participant) -> None:
        self.members.append(participant)

    def average_skill(self) -> float:
        """Mean skill level, 0.0 for an empty team."""
        if not self.members:
            return 0.0
        return sum(m.skill_level for m in self.members) / len(self.members)

    def role_diversity(self) -> int:
        """Number of distinct roles among members."""
        return len({m.role for m in self.members})

    def has_role(self, role: Role) -> bool:
        return any(m.role is role for m in self.members)

    def count_of_activity(self, game: Game) -> int:
        """Number of members preferring *game*."""
        return sum(1 for m in self.members if m.game is game)

    def activity_counts(self) -> dict[Game, int]:
        """Per-game member counts, only games that appear."""
        return dict(Counter(m.game for m in self.members))

    def has_personality_type(self, ptype: PersonalityType) -> bool:
        return any(m.personality_type is ptype for m in self.members)


class AllocationResult(BaseModel):
    """Teams formed by one allocation run plus the unassigned remainder."""

    teams: list[Team] = Field(default_factory=list)
    leftovers: list[Participant] = Field(default_factory=list)

    @property
    def total_participants(self) -> int:
        return sum(t.size for t in self.teams) + len(self.leftovers)

    def assigned_participants(self) -> list[Participant]:
        """All team members, in team then selection order."""
        return [m for t in self.teams for m in t.members]

    def find_team_for(self, participant_id: str) -> Team | None:
        """Return the team holding *participant_id*, or None when unassigned."""
        return next(
            (t for t in self.teams if any(m.id == participant_id for m in t.members)),
            None,
        )
