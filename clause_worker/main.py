from clause_worker.config.settings import Settings
from clause_worker.database.connection import close_pool, init_pool
from clause_worker.database.repositories.contract_repository import ContractRepository
from clause_worker.database.repositories.job_repository import JobRepository
from clause_worker.logging.logger import Log
from clause_worker.processor.processor import build_processor
from clause_worker.processor.status_reporter import StatusReporter
from clause_worker.worker.job_runner import JobRunner
from clause_worker.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        contract_repo = ContractRepository()
        processor = build_processor(settings, contract_repo=contract_repo)
        job_repo = JobRepository(settings.max_job_attempts)
        job_runner = JobRunner(processor, job_repo, settings, StatusReporter(contract_repo))
        worker = Worker(job_repo, job_runner, settings)
        worker.run()
    finally:
        close_pool()


if __name__ == "__main__":
    main()
