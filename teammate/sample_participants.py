"""Generated participant pools for demos and trials.

Names come from a fixed pool; preferences and scores are drawn from a seeded
generator so the same seed always yields the same pool.
"""

from __future__ import annotations

import random

from teammate.participant_models import (
    MAX_PERSONALITY_SCORE,
    MAX_SKILL_LEVEL,
    MIN_SKILL_LEVEL,
    Game,
    Participant,
    Role,
)


# ---------------------------------------------------------------------------
# Name pool for generated participants
# ---------------------------------------------------------------------------
_NAME_POOL: list[str] = [
    "Amara Perera", "Ben Carter", "Chloe Silva", "Dinesh Kumar", "Elena Rossi",
    "Farah Haddad", "George Mensah", "Hana Sato", "Isaac Cohen", "Julia Novak",
    "Kavin Raj", "Lena Fischer", "Mateo Garcia", "Nadia Ivanova", "Omar Farouk",
    "Priya Nair", "Quinn Walsh", "Rafael Costa", "Sara Lindqvist", "Tomas Berg",
]

# Score floor for generated participants.
_MIN_GENERATED_SCORE = 50


def _name_for(index: int) -> str:
    base = _NAME_POOL[index % len(_NAME_POOL)]
    rnd = index // len(_NAME_POOL)
    return base if rnd == 0 else f"{base} {rnd + 1}"


def generate_sample_participants(count: int, seed: int | None = 42) -> list[Participant]:
    """Build *count* valid participants with ids P001, P002, ...

    Args:
        count: Number of participants.
        seed: Random seed for reproducibility.

    Returns:
        List of Participant in id order.
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    rng = random.Random(seed)
    games = list(Game)
    roles = list(Role)

    participants: list[Participant] = []
    for i in range(count):
        name = _name_for(i)
        handle = name.lower().replace(" ", ".")
        participants.append(
            Participant(
                id=f"P{i + 1:03d}",
                name=name,
                email=f"{handle}@university.edu",
                game=rng.choice(games),
                skill_level=rng.randint(MIN_SKILL_LEVEL, MAX_SKILL_LEVEL),
                role=rng.choice(roles),
                personality_score=rng.randint(_MIN_GENERATED_SCORE, MAX_PERSONALITY_SCORE),
            )
        )
    return participants
