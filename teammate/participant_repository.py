"""Repository for the participant registry (JSON file)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
import threading
from typing import Any

from pydantic import BaseModel, Field

from teammate.errors import DuplicateParticipantError, ParticipantNotFoundError
from teammate.participant_models import Participant


logger = logging.getLogger(__name__)


class ParticipantRegistry(BaseModel):
    """On-disk layout of the registry."""

    version: str = "1.0"
    participants: list[Participant] = Field(default_factory=list)


class ParticipantRepository:
    """Thread-safe repository for registered participants."""

    def __init__(self, config_path: str | Path = "data/participants.json"):
        """Initialize repository with registry file path."""
        self.config_path = Path(config_path)
        self.backup_path = Path(f"{config_path}.backup")
        self._lock = threading.Lock()

    def load_participants(self) -> list[Participant]:
        """Load participants, or an empty list when no registry exists yet."""
        with self._lock:
            return self._load_without_lock()

    def save_participants(self, participants: list[Participant]) -> None:
        """Replace the registry with *participants* (backup kept)."""
        with self._lock:
            self._create_backup()
            self._save_without_lock(participants)

    def _load_without_lock(self) -> list[Participant]:
        if not self.config_path.exists():
            return []
        try:
            with open(self.config_path, encoding="utf-8") as f:
                data = json.load(f)
            return ParticipantRegistry(**data).participants
        except Exception as e:
            raise ValueError(f"Failed to load participants: {e}") from e

    def _save_without_lock(self, participants: list[Participant]) -> None:
        """Save without acquiring lock (internal use)."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.config_path.with_suffix(".tmp")
        registry = ParticipantRegistry(participants=participants)
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(registry.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
            temp_path.replace(self.config_path)
        except Exception as e:
            if temp_path.exists():
                temp_path.unlink()
            raise ValueError(f"Failed to save participants: {e}") from e
        logger.debug("Participant registry saved: %d records", len(participants))

    def _create_backup(self) -> None:
        """Create backup of current registry file."""
        if self.config_path.exists():
            try:
                self.backup_path.write_text(self.config_path.read_text(encoding="utf-8"), encoding="utf-8")
            except OSError:
                logger.warning("Failed to create backup", exc_info=True)

    def _index_of(self, participants: list[Participant], participant_id: str) -> int:
        idx = next((i for i, p in enumerate(participants) if p.id == participant_id), None)
        if idx is None:
            logger.warning("Participant not found: %s", participant_id)
            raise ParticipantNotFoundError(participant_id)
        return idx

    def participant_exists(self, participant_id: str) -> bool:
        return any(p.id == participant_id for p in self.load_participants())

    def get_participant(self, participant_id: str) -> Participant:
        """Return the participant with *participant_id*."""
        participants = self.load_participants()
        return participants[self._index_of(participants, participant_id)]

    def add_participant(self, participant: Participant) -> list[Participant]:
        """Register a new participant."""
        with self._lock:
            participants = self._load_without_lock()
            if participant in participants:
                raise DuplicateParticipantError(participant.id)
            updated = [*participants, participant]
            self._create_backup()
            self._save_without_lock(updated)
        logger.info("Participant added: %s - %s", participant.id, participant.name)
        return updated

    def import_participants(self, incoming: list[Participant]) -> int:
        """Bulk insert *incoming*, skipping ids already registered.

        Returns:
            Number of participants inserted.
        """
        with self._lock:
            participants = self._load_without_lock()
            known = {p.id for p in participants}
            added: list[Participant] = []
            for p in incoming:
                if p.id in known:
                    logger.debug("Skipping already registered participant %s", p.id)
                    continue
                known.add(p.id)
                added.append(p)
            if added:
                self._create_backup()
                self._save_without_lock([*participants, *added])
        logger.info("Imported %d of %d participants", len(added), len(incoming))
        return len(added)

    def update_participant(self, participant_id: str, updates: dict[str, Any]) -> Participant:
        """Replace a participant with a copy carrying *updates*."""
        with self._lock:
            participants = self._load_without_lock()
            idx = self._index_of(participants, participant_id)
            updated = participants[idx].with_updates(**updates)
            if updated.id != participant_id and updated in participants:
                raise DuplicateParticipantError(updated.id)
            new_participants = [*participants]
            new_participants[idx] = updated
            self._create_backup()
            self._save_without_lock(new_participants)
        logger.info("Participant %s updated: %s", participant_id, ", ".join(sorted(updates)))
        return updated

    def delete_participant(self, participant_id: str) -> list[Participant]:
        """Remove a participant from the registry."""
        with self._lock:
            participants = self._load_without_lock()
            self._index_of(participants, participant_id)
            remaining = [p for p in participants if p.id != participant_id]
            self._create_backup()
            self._save_without_lock(remaining)
        logger.info("Participant deleted: %s", participant_id)
        return remaining
