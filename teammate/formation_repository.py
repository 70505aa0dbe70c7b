"""Repository for the latest team formation (JSON file)."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
from pathlib import Path
import threading

from pydantic import BaseModel, Field

from teammate.engine.statistics import FormationStatistics
from teammate.team_models import AllocationResult


logger = logging.getLogger(__name__)

_DEFAULT_PATH = "data/formation.json"


class FormationRecord(BaseModel):
    """A formation as stored: teams, leftovers and their statistics."""

    result: AllocationResult
    statistics: FormationStatistics
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )


class FormationRepository:
    """Thread-safe persistence layer for FormationRecord."""

    def __init__(self, config_path: str | Path = _DEFAULT_PATH) -> None:
        self._path = Path(config_path)
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def save_formation(self, record: FormationRecord) -> None:
        """Persist *record* to JSON file (atomic write)."""
        with self._lock:
            self._atomic_write(record)
        logger.info(
            "Formation saved: %d teams, %d remaining",
            record.statistics.teams_formed, record.statistics.participants_remaining,
        )

    def load_formation(self) -> FormationRecord | None:
        """Load from JSON. Returns ``None`` when no file exists."""
        with self._lock:
            if not self._path.exists():
                return None
            try:
                with open(self._path, encoding="utf-8") as fh:
                    data = json.load(fh)
                return FormationRecord(**data)
            except Exception as exc:
                raise ValueError(f"Failed to load formation: {exc}") from exc

    def delete_formation(self) -> None:
        """Remove the formation file if it exists."""
        with self._lock:
            if self._path.exists():
                self._path.unlink()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _atomic_write(self, record: FormationRecord) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as fh:
                json.dump(record.model_dump(mode="json"), fh, indent=2, ensure_ascii=False)
            tmp.replace(self._path)
        except Exception as exc:
            if tmp.exists():
                tmp.unlink()
            raise ValueError(f"Failed to save formation: {exc}") from exc
