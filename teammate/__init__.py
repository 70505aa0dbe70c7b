"""Balanced team formation for game and sports clubs."""

from .engine.allocation import allocate
from .engine.statistics import FormationStatistics, summarize
from .participant_models import Game, Participant, Role
from .personality_types import PersonalityType, classify
from .team_models import AllocationResult, Team

__all__ = [
    "AllocationResult",
    "FormationStatistics",
    "Game",
    "Participant",
    "PersonalityType",
    "Role",
    "Team",
    "allocate",
    "classify",
    "summarize",
]
