from clause_worker.config.settings import Settings
from clause_worker.database.repositories.contract_repository import ContractRepository
from clause_worker.extraction.base import BaseClauseExtractor
from clause_worker.extraction.factory import ClauseExtractorFactory
from clause_worker.logging.logger import Log
from clause_worker.ocr.base import BaseOcrEngine
from clause_worker.ocr.factory import OcrEngineFactory
from clause_worker.ocr.shard_loader import ShardLoader
from clause_worker.processor.exceptions import ContractProcessingError
from clause_worker.processor.pipeline import PipelineContext, PipelineStep
from clause_worker.processor.status_reporter import StatusReporter
from clause_worker.processor.steps import (
    AwaitOcrStep,
    ExtractClausesStep,
    LoadShardsStep,
    MarkCompletedStep,
    MarkExtractingStep,
    MarkFailedStep,
    MarkProcessingStep,
    PersistAssembledTextStep,
    ReassembleStep,
    SubmitOcrStep,
)
from clause_worker.storage.base import BaseBlobStore
from clause_worker.storage.factory import BlobStoreFactory


class Processor:
    """Drives one contract through the pipeline.

    Pipeline: processing -> OCR submit/wait -> extracting -> load shards ->
    reassemble -> (persist text) -> extract clauses -> completed.
    Any step error runs the failed step and surfaces as ContractProcessingError.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        failed_step: PipelineStep,
        contract_repo: ContractRepository,
    ) -> None:
        self._steps = steps
        self._failed_step = failed_step
        self._contract_repo = contract_repo

    def process(self, contract_id: str, source_uri: str, job_id: int | None = None) -> None:
        """Run the pipeline for a contract.

        Raises:
            ContractNotFoundError: if the contract record does not exist.
            ContractProcessingError: if any step fails; the record is marked failed.
        """
        Log.info(f"Processing contract {contract_id} for job {job_id}", source_uri=source_uri)

        record = self._contract_repo.find_by_id(contract_id)
        if record.status.is_terminal:
            Log.warning(
                f"Contract {contract_id} is already {record.status.value}, skipping run"
            )
            return

        context = PipelineContext(
            contract_id=contract_id,
            source_uri=source_uri,
            job_id=job_id,
            status=record.status,
        )
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                stage = context.status.value
                context.error_message = str(exc) or type(exc).__name__
                Log.exception(
                    f"Step {type(step).__name__} failed: {context.error_message}",
                    contract_id=contract_id,
                )
                self._failed_step.run(context)
                raise ContractProcessingError(
                    f"Contract {contract_id} failed during {stage}: {context.error_message}"
                ) from exc

        Log.info(f"Contract {contract_id} processed successfully")


def build_processor(
    settings: Settings,
    *,
    contract_repo: ContractRepository | None = None,
    blob_store: BaseBlobStore | None = None,
    ocr_engine: BaseOcrEngine | None = None,
    extractor: BaseClauseExtractor | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    contract_repo = contract_repo or ContractRepository()
    blob_store = blob_store or BlobStoreFactory.create(settings)
    ocr_engine = ocr_engine or OcrEngineFactory.create(settings, blob_store)
    extractor = extractor or ClauseExtractorFactory.create(settings)
    status_reporter = StatusReporter(contract_repo)

    steps: list[PipelineStep] = [
        MarkProcessingStep(status_reporter),
        SubmitOcrStep(ocr_engine, blob_store),
        AwaitOcrStep(ocr_engine, status_reporter, settings.ocr_timeout_seconds),
        MarkExtractingStep(status_reporter),
        LoadShardsStep(ShardLoader(blob_store, max_workers=settings.shard_download_workers)),
        ReassembleStep(status_reporter),
    ]
    if settings.persist_assembled_text:
        steps.append(PersistAssembledTextStep(blob_store))
    steps.extend(
        [
            ExtractClausesStep(extractor),
            MarkCompletedStep(status_reporter),
        ]
    )
    return Processor(
        steps=steps,
        failed_step=MarkFailedStep(status_reporter),
        contract_repo=contract_repo,
    )
