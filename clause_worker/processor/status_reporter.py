from clause_worker.database.models import ContractStatus
from clause_worker.database.repositories.contract_repository import ContractRepository
from clause_worker.extraction.models import ClauseExtractionResult
from clause_worker.logging.logger import Log

PROGRESS_PROCESSING = 10
PROGRESS_OCR_COMPLETE = 50
PROGRESS_EXTRACTING = 60
PROGRESS_REASSEMBLED = 80
PROGRESS_COMPLETED = 100


class StatusReporter:
    """Writes pipeline checkpoints to the record store.

    Every write is a single best-effort call: failures are logged and never
    raised, so a lost update cannot abort or roll back the run.
    """

    def __init__(self, contract_repo: ContractRepository) -> None:
        self._contract_repo = contract_repo

    def mark_processing(self, contract_id: str) -> bool:
        return self._report(contract_id, ContractStatus.PROCESSING, progress=PROGRESS_PROCESSING)

    def report_progress(self, contract_id: str, status: ContractStatus, progress: int) -> bool:
        return self._report(contract_id, status, progress=progress)

    def mark_extracting(self, contract_id: str) -> bool:
        return self._report(contract_id, ContractStatus.EXTRACTING, progress=PROGRESS_EXTRACTING)

    def mark_completed(self, contract_id: str, result: ClauseExtractionResult) -> bool:
        """Persist the terminal status together with both clauses."""
        return self._report(
            contract_id,
            ContractStatus.COMPLETED,
            progress=PROGRESS_COMPLETED,
            indemnification_text=result.indemnification_text,
            termination_text=result.termination_text,
        )

    def mark_failed(self, contract_id: str) -> bool:
        return self._report(contract_id, ContractStatus.FAILED)

    def _report(
        self,
        contract_id: str,
        status: ContractStatus,
        *,
        progress: int | None = None,
        indemnification_text: str | None = None,
        termination_text: str | None = None,
    ) -> bool:
        try:
            record = self._contract_repo.update_status(
                contract_id,
                status,
                progress=progress,
                indemnification_text=indemnification_text,
                termination_text=termination_text,
            )
        except Exception as exc:
            Log.error(
                f"Failed to update contract status: {exc}",
                contract_id=contract_id,
                status=status.value,
            )
            return False

        if record is None:
            Log.warning(
                "Status update ignored, contract already in a terminal state",
                contract_id=contract_id,
                status=status.value,
            )
            return False

        Log.info(
            f"Contract status updated to {status.value}",
            contract_id=contract_id,
            progress=record.progress,
        )
        return True
