from clause_worker.config.settings import Settings
from clause_worker.database.models import JobRecord
from clause_worker.database.repositories.job_repository import JobRepository
from clause_worker.logging.logger import Log
from clause_worker.processor.exceptions import ProcessorError
from clause_worker.processor.processor import Processor
from clause_worker.processor.status_reporter import StatusReporter


class JobRunner:
    """Runs one contract job and settles it in the queue.

    ProcessorError means the run reached a verdict (record failed, or no such
    record): the job fails at once. Any other error happened before the run
    started and is retried up to max_job_attempts; after the last attempt the
    record is marked failed too.
    """

    def __init__(
        self,
        processor: Processor,
        job_repo: JobRepository,
        settings: Settings,
        status_reporter: StatusReporter | None = None,
    ) -> None:
        self._processor = processor
        self._job_repo = job_repo
        self._settings = settings
        self._status_reporter = status_reporter

    def run(self, job: JobRecord) -> None:
        attempt = job.attempts + 1
        Log.info(f"Running job {job.id}, attempt {attempt}", contract_id=job.contract_id)
        try:
            self._processor.process(job.contract_id, job.source_uri, job.id)
            self._job_repo.mark_done(job.id)
        except ProcessorError as exc:
            Log.error(f"Job {job.id} failed: {exc}", contract_id=job.contract_id)
            self._job_repo.mark_failed(job.id, str(exc))
            return
        except Exception as exc:
            self._retry_or_give_up(job, exc)
            return
        Log.info(f"Job {job.id} done", contract_id=job.contract_id)

    def _retry_or_give_up(self, job: JobRecord, exc: Exception) -> None:
        attempt = job.attempts + 1
        if attempt < self._settings.max_job_attempts:
            Log.warning(f"Job {job.id} attempt {attempt} failed, will retry: {exc}")
            self._job_repo.increment_attempts(job.id)
            return

        Log.error(f"Job {job.id} gave up after {attempt} attempts: {exc}")
        self._job_repo.mark_failed(job.id, str(exc))
        if self._status_reporter is not None:
            self._status_reporter.mark_failed(job.contract_id)
