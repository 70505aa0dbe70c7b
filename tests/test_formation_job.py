"""Tests for teammate/formation_job.py."""

from teammate.formation_job import FormationJob, start_formation_job
from teammate.sample_participants import generate_sample_participants
import pytest


@pytest.fixture
def participants():
    return generate_sample_participants(17)


class TestFormationJob:
    def test_background_run_completes(self, participants):
        job = start_formation_job(participants, 5, seed=7)
        assert job.join(timeout=10)
        assert job.error is None
        assert job.result is not None
        assert job.statistics.teams_formed == 3
        assert job.statistics.participants_remaining == 2

    def test_same_seed_same_teams(self, participants):
        a = start_formation_job(participants, 4, seed=11)
        b = start_formation_job(participants, 4, seed=11)
        a.join(timeout=10)
        b.join(timeout=10)
        assert [[m.id for m in t.members] for t in a.result.teams] == [
            [m.id for m in t.members] for t in b.result.teams
        ]

    def test_insufficient_participants_recorded(self):
        job = FormationJob(generate_sample_participants(2), 5)
        job.run()
        assert job.done
        assert job.result is None
        assert "Not enough participants" in job.error

    def test_empty_pool_recorded(self):
        job = FormationJob([], 3)
        job.run()
        assert job.done
        assert "No participants" in job.error

    def test_snapshot_isolated_from_caller(self, participants):
        job = FormationJob(participants, 5, seed=1)
        participants.clear()
        job.run()
        assert job.statistics.total_participants == 17

    def test_cancelled_job_discards_result(self, participants):
        job = FormationJob(participants, 5, seed=1)
        job.mark_cancelled()
        job.run()
        assert job.cancelled
        assert job.done
        assert job.result is None

    def test_not_done_before_run(self, participants):
        job = FormationJob(participants, 5)
        assert not job.done
        assert job.join() is False
