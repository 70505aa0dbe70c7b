"""Team balance analysis: diversity scoring and coverage gaps for formed teams.

All functions are *pure*.
"""

from __future__ import annotations

from collections import Counter
import math

from pydantic import BaseModel, Field

from teammate.engine.allocation import MAX_MEMBERS_PER_GAME
from teammate.participant_models import Game, Role
from teammate.personality_types import PersonalityType
from teammate.team_models import AllocationResult, Team


# Members further apart than this in skill trigger a warning.
_SKILL_SPREAD_WARNING = 6


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------
class DimensionDistribution(BaseModel):
    """Count distribution for a single dimension."""

    dimension_name: str
    counts: dict[str, int]
    entropy: float = 0.0
    blau: float = Field(ge=0.0, le=1.0, default=0.0)


class TeamBalance(BaseModel):
    """Balance report for one team."""

    team_id: int
    average_skill: float = Field(ge=0.0)
    diversity_score: float = Field(ge=0.0, le=100.0)
    distributions: list[DimensionDistribution]
    missing_roles: list[str]
    warnings: list[str]


class FormationBalance(BaseModel):
    """Balance reports for every team of a formation."""

    teams: list[TeamBalance]
    skill_gap: float = Field(ge=0.0, default=0.0)
    mean_diversity: float = Field(ge=0.0, le=100.0, default=0.0)


# ---------------------------------------------------------------------------
# Shannon entropy / Blau index
# ---------------------------------------------------------------------------
def _shannon_entropy(counts: dict[str, int]) -> float:
    """Entropy of *counts* divided by its maximum, so an even spread over
    every possible value scores 1.0 and a single value scores 0.0.
    """
    total = sum(counts.values())
    if total == 0:
        return 0.0
    k = len(counts)
    if k <= 1:
        return 0.0
    probs = [c / total for c in counts.values() if c > 0]
    raw = -sum(p * math.log2(p) for p in probs)
    max_entropy = math.log2(k)
    return raw / max_entropy if max_entropy > 0 else 0.0


def calculate_blau_index(values: list[str]) -> float:
    """Blau's heterogeneity index of member attributes.

    One minus the sum of squared shares: 0.0 when every member has the same
    role (or game, or type), approaching 1.0 as members spread out.
    """
    if not values:
        return 0.0
    n = len(values)
    counts = Counter(values)
    return 1.0 - sum((c / n) ** 2 for c in counts.values())


# ---------------------------------------------------------------------------
# Possible values per dimension
# ---------------------------------------------------------------------------
_POSSIBLE: dict[str, list[str]] = {
    "role": [r.value for r in Role],
    "game": [g.value for g in Game],
    "personality": [p.value for p in PersonalityType],
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def calculate_team_balance(team: Team) -> TeamBalance:
    """Analyse role, game and personality distribution for *team*."""
    values: dict[str, list[str]] = {
        "role": [m.role.value for m in team.members],
        "game": [m.game.value for m in team.members],
        "personality": [m.personality_type.value for m in team.members],
    }

    distributions: list[DimensionDistribution] = []
    entropies: list[float] = []
    for dim_name, dim_values in values.items():
        counter = Counter(dim_values)
        # fill missing values with 0 for entropy calc
        full_counts = {v: counter.get(v, 0) for v in _POSSIBLE[dim_name]}
        ent = _shannon_entropy(full_counts)
        entropies.append(ent)
        distributions.append(DimensionDistribution(
            dimension_name=dim_name,
            counts=full_counts,
            entropy=round(ent, 3),
            blau=round(calculate_blau_index(dim_values), 4),
        ))

    diversity = round(sum(entropies) / len(entropies) * 100, 1)
    role_counts = Counter(values["role"])
    missing_roles = [r.value for r in Role if not team.has_role(r)]

    warnings: list[str] = []
    if team.members and not team.has_personality_type(PersonalityType.LEADER):
        warnings.append("Team has no Leader")
    duplicated = sorted(r for r, c in role_counts.items() if c > 1)
    if duplicated:
        warnings.append(f"Duplicate roles: {', '.join(duplicated)}")
    for game, count in sorted(team.activity_counts().items(), key=lambda item: item[0].value):
        if count > MAX_MEMBERS_PER_GAME:
            warnings.append(f"{count} members prefer {game.value}")
    if team.members:
        skills = [m.skill_level for m in team.members]
        if max(skills) - min(skills) >= _SKILL_SPREAD_WARNING:
            warnings.append(f"Wide skill spread ({min(skills)}-{max(skills)})")

    return TeamBalance(
        team_id=team.team_id,
        average_skill=round(team.average_skill(), 2),
        diversity_score=diversity,
        distributions=distributions,
        missing_roles=missing_roles,
        warnings=warnings,
    )


def calculate_formation_balance(result: AllocationResult) -> FormationBalance:
    """Balance report for every team in *result*."""
    reports = [calculate_team_balance(t) for t in result.teams]
    if not reports:
        return FormationBalance(teams=[])
    averages = [t.average_skill() for t in result.teams]
    return FormationBalance(
        teams=reports,
        skill_gap=round(max(averages) - min(averages), 2),
        mean_diversity=round(sum(r.diversity_score for r in reports) / len(reports), 1),
    )
