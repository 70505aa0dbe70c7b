"""Domain errors for team formation.

All errors derive from ``ValueError`` so callers that already guard with
``except ValueError`` keep working.
"""

from __future__ import annotations


class TeamMateError(ValueError):
    """Base class for team formation failures."""


class NoParticipantsError(TeamMateError):
    """Raised when an allocation is requested over an empty participant pool."""

    def __init__(self, message: str = "No participants available for team formation") -> None:
        super().__init__(message)


class InsufficientParticipantsError(TeamMateError):
    """Raised when the pool cannot fill even a single team."""

    def __init__(self, available: int, required: int) -> None:
        self.available = available
        self.required = required
        super().__init__(
            f"Not enough participants. Need at least {required}, but only {available} available"
        )


class InvalidTeamSizeError(TeamMateError):
    """Raised when a team size falls outside the configured bounds."""


class ParticipantNotFoundError(TeamMateError):
    """Raised when a participant id is not registered."""

    def __init__(self, participant_id: str) -> None:
        self.participant_id = participant_id
        super().__init__(f"Participant not found: {participant_id}")


class DuplicateParticipantError(TeamMateError):
    """Raised when registering an id that already exists."""

    def __init__(self, participant_id: str) -> None:
        self.participant_id = participant_id
        super().__init__(f"Participant with id '{participant_id}' already exists")


class CSVFormatError(TeamMateError):
    """Raised for a malformed row in an imported CSV file."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"{message} (line {line_number})"
        super().__init__(message)


class NoTeamsFormedError(TeamMateError):
    """Raised when exporting a formation that contains no teams."""

    def __init__(self, message: str = "No teams available to save") -> None:
        super().__init__(message)
