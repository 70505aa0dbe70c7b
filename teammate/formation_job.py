"""Background team formation shared between a worker thread and the Streamlit UI."""

from __future__ import annotations

from collections.abc import Sequence
import logging
import random
import threading

from teammate.engine.allocation import allocate
from teammate.engine.statistics import FormationStatistics, summarize
from teammate.errors import TeamMateError
from teammate.participant_models import Participant
from teammate.team_models import AllocationResult


logger = logging.getLogger(__name__)


class FormationJob:
    """Thread-safe container for the outcome of one background allocation."""

    def __init__(self, participants: Sequence[Participant], team_size: int, seed: int | None = None):
        # Snapshot so later edits to the caller's list cannot reach the worker.
        self.participants: tuple[Participant, ...] = tuple(participants)
        self.team_size = team_size
        self.seed = seed
        self._lock = threading.Lock()
        self._done = False
        self._cancelled = False
        self._error: str | None = None
        self._result: AllocationResult | None = None
        self._statistics: FormationStatistics | None = None
        self._thread: threading.Thread | None = None

    def run(self) -> None:
        """Allocate and summarise; record the outcome instead of raising."""
        try:
            result = allocate(self.participants, self.team_size, rng=random.Random(self.seed))
            stats = summarize(result, self.team_size)
        except TeamMateError as e:
            logger.warning("Team formation failed: %s", e)
            self.mark_error(str(e))
            return
        except Exception as e:
            logger.exception("Unexpected error during team formation")
            self.mark_error(f"{type(e).__name__}: {e}")
            return
        with self._lock:
            if self._cancelled:
                return
            self._result = result
            self._statistics = stats
            self._done = True

    def start(self) -> FormationJob:
        thread = threading.Thread(target=self.run, name="team-formation", daemon=True)
        self._thread = thread
        thread.start()
        return self

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the worker. Returns True once the job has finished."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self.done

    def mark_error(self, error: str) -> None:
        with self._lock:
            self._error = error
            self._done = True

    def mark_cancelled(self) -> None:
        """Discard the outcome; the allocation itself runs to completion."""
        with self._lock:
            self._cancelled = True
            self._done = True

    @property
    def done(self) -> bool:
        with self._lock:
            return self._done

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    @property
    def error(self) -> str | None:
        with self._lock:
            return self._error

    @property
    def result(self) -> AllocationResult | None:
        with self._lock:
            return self._result

    @property
    def statistics(self) -> FormationStatistics | None:
        with self._lock:
            return self._statistics


def start_formation_job(
    participants: Sequence[Participant],
    team_size: int,
    seed: int | None = None,
) -> FormationJob:
    """Run one allocation on a daemon thread and return its job handle."""
    logger.info("Queueing team formation: %d participants, team size %d", len(participants), team_size)
    return FormationJob(participants, team_size, seed).start()
