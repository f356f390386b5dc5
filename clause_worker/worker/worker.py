import time
from collections.abc import Callable

from clause_worker.config.settings import Settings
from clause_worker.database.connection import get_connection
from clause_worker.database.models import JobRecord
from clause_worker.database.repositories.job_repository import JobRepository
from clause_worker.logging.logger import Log
from clause_worker.worker.job_runner import JobRunner

STALE_CHECK_INTERVAL_SECONDS = 60.0


class Worker:
    """Claims contract jobs one at a time and hands them to the JobRunner.

    Jobs left in processing by a crashed worker are returned to the queue,
    checked at most once per STALE_CHECK_INTERVAL_SECONDS.
    """

    def __init__(
        self,
        job_repo: JobRepository,
        job_runner: JobRunner,
        settings: Settings,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._job_repo = job_repo
        self._job_runner = job_runner
        self._settings = settings
        self._clock = clock
        self._last_stale_check: float | None = None

    def run(self, max_jobs: int | None = None) -> int:
        """Poll until interrupted, or until max_jobs jobs ran. Returns the job count."""
        Log.info(
            "Worker started, polling for contract jobs",
            poll_interval=self._settings.job_poll_interval_seconds,
        )
        processed = 0
        try:
            while max_jobs is None or processed < max_jobs:
                self._maybe_release_stale_jobs()
                job = self._try_claim_job()
                if job is None:
                    Log.debug("Queue empty, sleeping")
                    time.sleep(self._settings.job_poll_interval_seconds)
                    continue
                self._run_job(job)
                processed += 1
        except KeyboardInterrupt:
            Log.info(f"Worker interrupted after {processed} jobs, shutting down")
        return processed

    def _run_job(self, job: JobRecord) -> None:
        # A job left unsettled stays in processing until the stale release re-queues it.
        try:
            self._job_runner.run(job)
        except Exception as exc:
            Log.exception(
                f"Job {job.id} could not be settled: {exc}", contract_id=job.contract_id
            )

    def _try_claim_job(self) -> JobRecord | None:
        try:
            with get_connection() as conn:
                return self._job_repo.claim_next_job(conn)
        except Exception as exc:
            Log.warning(f"Could not claim a job, will retry: {exc}")
            return None

    def _maybe_release_stale_jobs(self) -> None:
        now = self._clock()
        if (
            self._last_stale_check is not None
            and now - self._last_stale_check < STALE_CHECK_INTERVAL_SECONDS
        ):
            return
        self._last_stale_check = now
        try:
            released = self._job_repo.release_stale_jobs(self._settings.job_stale_after_seconds)
        except Exception as exc:
            Log.warning(f"Could not release stale jobs: {exc}")
            return
        if released:
            Log.warning(f"Returned {released} stale jobs to the queue")
