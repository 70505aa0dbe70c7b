"""Formation statistics: counts summarising one allocation run.

All functions are *pure*.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from teammate.team_models import AllocationResult


class FormationStatistics(BaseModel):
    """Summary counts for reporting."""

    total_participants: int = Field(ge=0)
    team_size: int = Field(ge=1)
    teams_formed: int = Field(ge=0)
    participants_assigned: int = Field(ge=0)
    participants_remaining: int = Field(ge=0)

    @model_validator(mode="after")
    def check_totals(self) -> FormationStatistics:
        if self.participants_assigned + self.participants_remaining != self.total_participants:
            raise ValueError("assigned + remaining must equal total participants")
        if self.teams_formed * self.team_size != self.participants_assigned:
            raise ValueError("assigned participants must fill every team exactly")
        return self

    @property
    def assignment_rate(self) -> float:
        """Share of participants placed in a team, 0.0 when there are none."""
        if self.total_participants == 0:
            return 0.0
        return self.participants_assigned / self.total_participants


def summarize(result: AllocationResult, team_size: int) -> FormationStatistics:
    """Derive FormationStatistics from *result*.

    *team_size* must be the size the run used.

    Raises:
        ValueError: If a team in *result* does not hold *team_size* members.
    """
    uneven = [t.team_id for t in result.teams if t.size != team_size]
    if uneven:
        raise ValueError(f"Teams {uneven} do not have {team_size} members")
    assigned = sum(team.size for team in result.teams)
    remaining = len(result.leftovers)
    return FormationStatistics(
        total_participants=assigned + remaining,
        team_size=team_size,
        teams_formed=len(result.teams),
        participants_assigned=assigned,
        participants_remaining=remaining,
    )
