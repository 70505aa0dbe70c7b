"""CSV import of participants and export/reload of team formations."""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import IO

from pydantic import ValidationError

from teammate.errors import CSVFormatError, NoTeamsFormedError
from teammate.participant_models import Participant
from teammate.team_models import AllocationResult, Team


logger = logging.getLogger(__name__)

PARTICIPANT_COLUMNS = [
    "ID", "Name", "Email", "PreferredGame", "SkillLevel", "PreferredRole", "PersonalityScore",
]
FORMATION_COLUMNS = [
    "TeamID", "ParticipantID", "ParticipantName", "Email", "Game",
    "SkillLevel", "Role", "PersonalityScore", "PersonalityType",
]
# Leftover participants are written with this team id.
UNASSIGNED_TEAM_ID = 0


def _participant_from_cells(cells: list[str], line_number: int) -> Participant:
    pid, name, email, game, skill, role, score = (c.strip() for c in cells[:7])
    if not name:
        raise CSVFormatError("Empty name", line_number)
    try:
        skill_level = int(skill)
        personality_score = int(score)
    except ValueError as e:
        raise CSVFormatError("Invalid number format", line_number) from e
    try:
        return Participant(
            id=pid,
            name=name,
            email=email,
            game=game,
            skill_level=skill_level,
            role=role,
            personality_score=personality_score,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        raise CSVFormatError(f"Invalid participant data ({fields})", line_number) from e


# ---------------------------------------------------------------------------
# Participants
# ---------------------------------------------------------------------------
def decode_csv_bytes(data: bytes) -> str:
    """Decode an uploaded CSV file, dropping a UTF-8 byte order mark.

    Raises:
        CSVFormatError: If *data* is not valid UTF-8.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CSVFormatError(f"File is not UTF-8 encoded (byte {e.start})") from e


def read_participants_csv(fh: IO[str]) -> list[Participant]:
    """Parse participants from an open CSV stream.

    The first row is a header. Each data row needs at least seven columns:
    id, name, email, game, skill level, role, personality score. Blank lines
    are skipped. Ids must be unique within the file.

    Raises:
        CSVFormatError: On the first malformed row, with its line number.
    """
    participants: list[Participant] = []
    seen: set[str] = set()
    reader = csv.reader(fh)
    next(reader, None)
    for cells in reader:
        line_number = reader.line_num
        if not any(c.strip() for c in cells):
            continue
        if len(cells) < 7:
            raise CSVFormatError(f"Expected 7+ columns, found {len(cells)}", line_number)
        participant = _participant_from_cells(cells, line_number)
        if participant.id in seen:
            raise CSVFormatError(f"Duplicate participant id '{participant.id}'", line_number)
        seen.add(participant.id)
        participants.append(participant)
    return participants


def load_participants_csv(filepath: str | Path) -> list[Participant]:
    """Load participants from a CSV file.

    Raises:
        FileNotFoundError: If *filepath* does not exist.
        CSVFormatError: On a malformed row or a file that is not UTF-8.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {filepath}")
    participants = read_participants_csv(io.StringIO(decode_csv_bytes(path.read_bytes())))
    logger.info("Loaded %d participants from %s", len(participants), filepath)
    return participants


def write_participants_csv(participants: list[Participant], fh: IO[str]) -> None:
    """Write *participants* in the import layout."""
    writer = csv.writer(fh)
    writer.writerow(PARTICIPANT_COLUMNS)
    for p in participants:
        writer.writerow([
            p.id, p.name, p.email, p.game.value, p.skill_level, p.role.value, p.personality_score,
        ])


# ---------------------------------------------------------------------------
# Formations
# ---------------------------------------------------------------------------
def _formation_row(team_id: int, p: Participant) -> list[str | int]:
    return [
        team_id, p.id, p.name, p.email, p.game.value,
        p.skill_level, p.role.value, p.personality_score, p.personality_type.value,
    ]


def write_formation_csv(result: AllocationResult, fh: IO[str]) -> int:
    """Write team rows followed by leftovers (TeamID 0).

    Returns:
        Number of participant rows written.
    """
    writer = csv.writer(fh)
    writer.writerow(FORMATION_COLUMNS)
    rows = 0
    for team in result.teams:
        for p in team.members:
            writer.writerow(_formation_row(team.team_id, p))
            rows += 1
    for p in result.leftovers:
        writer.writerow(_formation_row(UNASSIGNED_TEAM_ID, p))
        rows += 1
    return rows


def export_formation_csv(result: AllocationResult, filepath: str | Path) -> str:
    """Export a formation to CSV, creating parent directories.

    Raises:
        NoTeamsFormedError: If *result* has no teams.
    """
    if not result.teams:
        raise NoTeamsFormedError()
    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        rows = write_formation_csv(result, f)
    logger.info("Formation CSV exported: %s (%d rows)", filepath, rows)
    return str(filepath)


def read_formation_csv(fh: IO[str]) -> AllocationResult:
    """Rebuild an AllocationResult from formation CSV rows.

    Teams come back ordered by id. Rows with TeamID 0 become leftovers. A
    participant may appear only once.

    Raises:
        CSVFormatError: On a malformed row.
    """
    teams: dict[int, Team] = {}
    leftovers: list[Participant] = []
    seen: set[str] = set()
    reader = csv.reader(fh)
    next(reader, None)
    for cells in reader:
        line_number = reader.line_num
        if not any(c.strip() for c in cells):
            continue
        if len(cells) < 8:
            raise CSVFormatError(f"Expected 8+ columns, found {len(cells)}", line_number)
        try:
            team_id = int(cells[0].strip())
        except ValueError as e:
            raise CSVFormatError("Invalid team id", line_number) from e
        if team_id < 0:
            raise CSVFormatError("Invalid team id", line_number)
        participant = _participant_from_cells(cells[1:8], line_number)
        if participant.id in seen:
            raise CSVFormatError(f"Duplicate participant id '{participant.id}'", line_number)
        seen.add(participant.id)
        if team_id == UNASSIGNED_TEAM_ID:
            leftovers.append(participant)
        else:
            teams.setdefault(team_id, Team(team_id=team_id)).add_member(participant)
    return AllocationResult(
        teams=[teams[k] for k in sorted(teams)],
        leftovers=leftovers,
    )


def load_formation_csv(filepath: str | Path) -> AllocationResult:
    """Load a formation previously written by export_formation_csv.

    Raises:
        FileNotFoundError: If *filepath* does not exist.
        CSVFormatError: On a malformed row or a file that is not UTF-8.
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Team formation file not found: {filepath}")
    result = read_formation_csv(io.StringIO(decode_csv_bytes(path.read_bytes())))
    logger.info(
        "Loaded team formation from %s - teams: %d, remaining: %d",
        filepath, len(result.teams), len(result.leftovers),
    )
    return result
