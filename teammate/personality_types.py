"""Personality type classification for participants.

A participant's personality score (0-100 on the intake survey) maps onto one
of three bands. The type is always derived from the score and never stored on
its own.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------
class PersonalityType(str, Enum):
    """Personality category derived from a survey score."""

    LEADER = "Leader"
    BALANCED = "Balanced"
    THINKER = "Thinker"


class PersonalityBand(BaseModel):
    """Inclusive lower bound of the score range that yields *type*."""

    type: PersonalityType
    min_score: int = Field(ge=0, le=100)
    description: str = Field(..., min_length=5)


# ---------------------------------------------------------------------------
# Bands, highest first. Anything below the last band falls back to THINKER.
# ---------------------------------------------------------------------------
PERSONALITY_BANDS: list[PersonalityBand] = [
    PersonalityBand(
        type=PersonalityType.LEADER,
        min_score=90,
        description="Takes charge, sets direction and keeps the team moving.",
    ),
    PersonalityBand(
        type=PersonalityType.BALANCED,
        min_score=70,
        description="Adapts between leading and supporting as the game needs.",
    ),
    PersonalityBand(
        type=PersonalityType.THINKER,
        min_score=50,
        description="Observes, plans and contributes analysis before acting.",
    ),
]

_FALLBACK_TYPE = PersonalityType.THINKER


def classify(score: int) -> PersonalityType:
    """Map a personality score onto its type.

    Total over all integers: scores at or above a band's lower bound get the
    highest matching band, everything else gets ``THINKER``.

    Args:
        score: Personality survey score.

    Returns:
        The matching PersonalityType.
    """
    for band in PERSONALITY_BANDS:
        if score >= band.min_score:
            return band.type
    return _FALLBACK_TYPE
