"""Tests for teammate/engine/statistics.py."""

import random

from teammate.engine.allocation import allocate
from teammate.engine.statistics import FormationStatistics, summarize
from teammate.sample_participants import generate_sample_participants
from teammate.team_models import AllocationResult
from pydantic import ValidationError
import pytest


class TestSummarize:
    def test_exact_fit(self):
        result = allocate(generate_sample_participants(9), 3, rng=random.Random(0))
        stats = summarize(result, 3)
        assert stats.total_participants == 9
        assert stats.team_size == 3
        assert stats.teams_formed == 3
        assert stats.participants_assigned == 9
        assert stats.participants_remaining == 0

    def test_remainder(self):
        result = allocate(generate_sample_participants(13), 5, rng=random.Random(0))
        stats = summarize(result, 5)
        assert stats.teams_formed == 2
        assert stats.participants_assigned == 10
        assert stats.participants_remaining == 3
        assert stats.total_participants == 13

    @pytest.mark.parametrize("count,team_size", [(3, 3), (11, 3), (29, 4), (50, 7), (99, 10)])
    def test_identities(self, count, team_size):
        result = allocate(generate_sample_participants(count), team_size, rng=random.Random(count))
        stats = summarize(result, team_size)
        assert stats.participants_assigned + stats.participants_remaining == stats.total_participants
        assert stats.teams_formed * stats.team_size == stats.participants_assigned
        assert stats.total_participants == count

    def test_empty_result(self):
        stats = summarize(AllocationResult(), 5)
        assert stats.total_participants == 0
        assert stats.teams_formed == 0
        assert stats.assignment_rate == 0.0

    def test_assignment_rate(self):
        result = allocate(generate_sample_participants(12), 5, rng=random.Random(0))
        assert summarize(result, 5).assignment_rate == pytest.approx(10 / 12)


class TestFormationStatisticsModel:
    def test_inconsistent_totals_rejected(self):
        with pytest.raises(ValidationError):
            FormationStatistics(
                total_participants=10,
                team_size=3,
                teams_formed=3,
                participants_assigned=9,
                participants_remaining=2,
            )

    def test_round_trip_dump(self):
        stats = FormationStatistics(
            total_participants=13,
            team_size=5,
            teams_formed=2,
            participants_assigned=10,
            participants_remaining=3,
        )
        assert FormationStatistics(**stats.model_dump()) == stats

    def test_counts_must_fill_teams(self):
        with pytest.raises(ValidationError):
            FormationStatistics(
                total_participants=12,
                team_size=5,
                teams_formed=2,
                participants_assigned=9,
                participants_remaining=3,
            )


class TestSummarizeTeamSize:
    def test_wrong_team_size_rejected(self):
        result = allocate(generate_sample_participants(13), 4, rng=random.Random(0))
        with pytest.raises(ValueError, match="do not have 5 members"):
            summarize(result, 5)
