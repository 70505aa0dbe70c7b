"""Pydantic models for participants and their preferences."""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar
import uuid

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from teammate.personality_types import PersonalityType, classify


MIN_SKILL_LEVEL = 1
MAX_SKILL_LEVEL = 10
MIN_PERSONALITY_SCORE = 0
MAX_PERSONALITY_SCORE = 100


# ---------------------------------------------------------------------------
# Preference enums
# ---------------------------------------------------------------------------
class Game(str, Enum):
    """Preferred game or sport."""

    CHESS = "Chess"
    FIFA = "FIFA"
    BASKETBALL = "Basketball"
    CSGO = "CS:GO"
    DOTA2 = "DOTA 2"
    VALORANT = "Valorant"

    @classmethod
    def from_label(cls, label: str) -> Game:
        """Resolve a display name or member name, case-insensitively."""
        return _lookup(cls, label)


class Role(str, Enum):
    """Preferred in-team role."""

    STRATEGIST = "Strategist"
    ATTACKER = "Attacker"
    DEFENDER = "Defender"
    SUPPORTER = "Supporter"
    COORDINATOR = "Coordinator"

    @classmethod
    def from_label(cls, label: str) -> Role:
        """Resolve a display name or member name, case-insensitively."""
        return _lookup(cls, label)


_E = TypeVar("_E", Game, Role)


def _lookup(enum_cls: type[_E], label: str) -> _E:
    if isinstance(label, enum_cls):
        return label
    text = str(label).strip().lower()
    for member in enum_cls:
        if text in (member.value.lower(), member.name.lower()):
            return member
    raise ValueError(f"Unknown {enum_cls.__name__.lower()}: {label!r}")


# ---------------------------------------------------------------------------
# Participant
# ---------------------------------------------------------------------------
class Participant(BaseModel):
    """A person eligible for team assignment.

    Records are frozen. Two participants are the same participant when their
    ids match, whatever their other fields hold, so membership checks stay
    correct after an update replaces a record.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, max_length=40)
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    game: Game
    skill_level: int = Field(..., ge=MIN_SKILL_LEVEL, le=MAX_SKILL_LEVEL)
    role: Role
    personality_score: int = Field(..., ge=MIN_PERSONALITY_SCORE, le=MAX_PERSONALITY_SCORE)

    @field_validator("id", "name", "email", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require at least a local part and a domain around '@'."""
        local, sep, domain = v.partition("@")
        if not sep or not local or not domain:
            raise ValueError("email must contain '@'")
        return v

    @field_validator("game", mode="before")
    @classmethod
    def parse_game(cls, v: Any) -> Any:
        return Game.from_label(v) if isinstance(v, str) else v

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, v: Any) -> Any:
        return Role.from_label(v) if isinstance(v, str) else v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def personality_type(self) -> PersonalityType:
        return classify(self.personality_score)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Participant):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def with_updates(self, **updates: Any) -> Participant:
        """Return a new validated record with *updates* applied."""
        data = self.model_dump(exclude={"personality_type"})
        data.update(updates)
        return Participant(**data)


def generate_participant_id() -> str:
    """New id for a participant registered through the survey form."""
    return f"P{uuid.uuid4().hex[:6].upper()}"
