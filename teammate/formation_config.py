"""Team formation configuration.

Reads TEAMMATE_* environment variables (populated from ``.env`` by the app
entry point) into a validated FormationConfig.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from teammate.errors import InvalidTeamSizeError


logger = logging.getLogger(__name__)

MIN_TEAM_SIZE = 3
MAX_TEAM_SIZE = 10
DEFAULT_TEAM_SIZE = 5
DEFAULT_DATA_DIR = "data"


def validate_team_size(size: int) -> int:
    """Check *size* against the configured bounds.

    Raises:
        InvalidTeamSizeError: If *size* is outside MIN_TEAM_SIZE..MAX_TEAM_SIZE.
    """
    if size < MIN_TEAM_SIZE or size > MAX_TEAM_SIZE:
        logger.warning("Invalid team size attempted: %s", size)
        raise InvalidTeamSizeError(
            f"Team size must be between {MIN_TEAM_SIZE} and {MAX_TEAM_SIZE}"
        )
    return size


class FormationConfig(BaseModel):
    """Settings for a team formation session."""

    team_size: int = DEFAULT_TEAM_SIZE
    seed: int | None = None
    data_dir: str = Field(default=DEFAULT_DATA_DIR, min_length=1)

    @field_validator("team_size")
    @classmethod
    def check_team_size(cls, v: int) -> int:
        return validate_team_size(v)

    @property
    def participants_path(self) -> Path:
        return Path(self.data_dir) / "participants.json"

    @property
    def formation_path(self) -> Path:
        return Path(self.data_dir) / "formation.json"

    @property
    def formation_csv_path(self) -> Path:
        return Path(self.data_dir) / "formation.csv"


def _int_from_env(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def load_formation_config() -> FormationConfig:
    """Build a FormationConfig from TEAMMATE_* environment variables.

    Reads TEAMMATE_TEAM_SIZE, TEAMMATE_SEED and TEAMMATE_DATA_DIR. Unset
    variables keep their defaults.

    Raises:
        ValueError: If a numeric variable is not an integer or the team size
            is out of bounds.
    """
    team_size = _int_from_env("TEAMMATE_TEAM_SIZE")
    seed = _int_from_env("TEAMMATE_SEED")
    data_dir = os.getenv("TEAMMATE_DATA_DIR", "").strip() or DEFAULT_DATA_DIR

    config = FormationConfig(
        team_size=team_size if team_size is not None else DEFAULT_TEAM_SIZE,
        seed=seed,
        data_dir=data_dir,
    )
    logger.info(
        "Formation config: team_size=%d seed=%s data_dir=%s",
        config.team_size, config.seed if config.seed is not None else "(random)", config.data_dir,
    )
    return config
