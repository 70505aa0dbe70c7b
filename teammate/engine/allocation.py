"""Team allocation engine: greedy balanced partition of a participant pool.

The pool is shuffled once, then teams are filled one at a time. Each team
starts from the first available Leader and adds the highest scoring candidate
until full:

- +3 for a role the team does not have yet
- +2 while the team holds fewer than two members of the candidate's game
- +2 for the team's first Thinker, except in the last open slot

Ties go to the candidate that comes first in pool order, so the shuffle is
the only source of randomness. Pass a seeded ``random.Random`` to reproduce a
run exactly.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
import logging
import random

from teammate.errors import (
    InsufficientParticipantsError,
    InvalidTeamSizeError,
    NoParticipantsError,
)
from teammate.participant_models import Game, Participant, Role
from teammate.personality_types import PersonalityType
from teammate.team_models import AllocationResult, Team


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Scoring weights
# ---------------------------------------------------------------------------
ROLE_DIVERSITY_BONUS = 3
GAME_SPREAD_BONUS = 2
THINKER_BONUS = 2
# Soft cap: the spread bonus stops once a game has this many members.
MAX_MEMBERS_PER_GAME = 2


def score_candidate(
    candidate: Participant,
    selected: Sequence[Participant],
    used_roles: set[Role],
    game_counts: Counter[Game],
    team_size: int,
) -> int:
    """Desirability of adding *candidate* to a partially built team.

    Args:
        candidate: Participant under consideration.
        selected: Members chosen so far, in selection order.
        used_roles: Roles already present among *selected*.
        game_counts: Per-game counts among *selected*.
        team_size: Target team size.

    Returns:
        Non-negative integer score; higher is better.
    """
    score = 0
    if candidate.role not in used_roles:
        score += ROLE_DIVERSITY_BONUS
    if game_counts[candidate.game] < MAX_MEMBERS_PER_GAME:
        score += GAME_SPREAD_BONUS
    if (
        len(selected) < team_size - 1
        and candidate.personality_type is PersonalityType.THINKER
        and not any(s.personality_type is PersonalityType.THINKER for s in selected)
    ):
        score += THINKER_BONUS
    return score


def select_balanced_members(
    available: Sequence[Participant],
    team_size: int,
) -> list[Participant]:
    """Pick up to *team_size* participants for one team.

    Works on a copy of *available*; the caller owns removal from its pool.

    Args:
        available: Current pool, in pool order.
        team_size: Number of members wanted.

    Returns:
        Selected participants in selection order. Holds *team_size* entries
        whenever the pool had at least that many.
    """
    pool = list(available)
    selected: list[Participant] = []
    used_roles: set[Role] = set()
    game_counts: Counter[Game] = Counter()

    def take(index: int) -> None:
        p = pool.pop(index)
        selected.append(p)
        used_roles.add(p.role)
        game_counts[p.game] += 1

    leader_index = next(
        (i for i, p in enumerate(pool) if p.personality_type is PersonalityType.LEADER),
        None,
    )
    if leader_index is not None:
        take(leader_index)

    while len(selected) < team_size and pool:
        best_index = 0
        best_score = -1
        for i, candidate in enumerate(pool):
            score = score_candidate(candidate, selected, used_roles, game_counts, team_size)
            if score > best_score:
                best_index, best_score = i, score
        take(best_index)

    return selected


def _remove_selected(pool: list[Participant], members: list[Participant]) -> None:
    # Match by identity: records sharing an id are still distinct entries.
    for member in members:
        del pool[next(i for i, p in enumerate(pool) if p is member)]


def allocate(
    participants: Sequence[Participant],
    team_size: int,
    rng: random.Random | None = None,
) -> AllocationResult:
    """Partition *participants* into full teams of *team_size*.

    Args:
        participants: Participants to assign. Order only matters through the
            shuffle.
        team_size: Members per team. Range checks against the configured
            bounds happen in ``formation_config``.
        rng: Source of the initial shuffle. A fresh unseeded generator is used
            when omitted.

    Returns:
        AllocationResult with teams numbered from 1 and the leftovers
        (fewer than *team_size*) in pool order.

    Raises:
        NoParticipantsError: *participants* is empty.
        InsufficientParticipantsError: fewer participants than *team_size*.
        InvalidTeamSizeError: *team_size* is not positive.
    """
    if team_size < 1:
        raise InvalidTeamSizeError(f"Team size must be positive, got {team_size}")
    if not participants:
        raise NoParticipantsError()
    if len(participants) < team_size:
        raise InsufficientParticipantsError(available=len(participants), required=team_size)

    logger.info("Starting team formation: %d participants, team size %d", len(participants), team_size)

    rng = rng if rng is not None else random.Random()
    pool = list(participants)
    rng.shuffle(pool)

    teams: list[Team] = []
    next_id = 1
    while len(pool) >= team_size:
        team = Team(team_id=next_id)
        members = select_balanced_members(pool, team_size)
        _remove_selected(pool, members)
        for member in members:
            team.add_member(member)
        teams.append(team)
        logger.debug(
            "Team %d formed: avg skill %.1f, %d unique roles",
            team.team_id, team.average_skill(), team.role_diversity(),
        )
        next_id += 1

    logger.info("Team formation completed - teams: %d, remaining: %d", len(teams), len(pool))
    return AllocationResult(teams=teams, leftovers=pool)
