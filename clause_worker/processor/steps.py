from clause_worker.database.models import ContractStatus
from clause_worker.extraction.base import BaseClauseExtractor
from clause_worker.logging.logger import Log
from clause_worker.ocr.base import BaseOcrEngine
from clause_worker.ocr.reassembler import reassemble
from clause_worker.ocr.shard_loader import ShardLoader
from clause_worker.processor.pipeline import PipelineContext, PipelineStep
from clause_worker.processor.status_reporter import (
    PROGRESS_OCR_COMPLETE,
    PROGRESS_REASSEMBLED,
    StatusReporter,
)
from clause_worker.storage.base import BaseBlobStore


def ocr_output_prefix(contract_id: str) -> str:
    return f"output/{contract_id}/"


def assembled_text_path(contract_id: str) -> str:
    return f"text/{contract_id}.txt"


class MarkProcessingStep(PipelineStep):
    def __init__(self, status_reporter: StatusReporter) -> None:
        self._status_reporter = status_reporter

    def run(self, context: PipelineContext) -> PipelineContext:
        context.status = ContractStatus.PROCESSING
        self._status_reporter.mark_processing(context.contract_id)
        return context


class SubmitOcrStep(PipelineStep):
    def __init__(self, ocr_engine: BaseOcrEngine, blob_store: BaseBlobStore) -> None:
        self._ocr_engine = ocr_engine
        self._blob_store = blob_store

    def run(self, context: PipelineContext) -> PipelineContext:
        context.output_prefix = ocr_output_prefix(context.contract_id)
        output_uri = self._blob_store.uri(context.output_prefix)
        context.ocr_operation = self._ocr_engine.submit(context.source_uri, output_uri)
        return context


class AwaitOcrStep(PipelineStep):
    def __init__(
        self,
        ocr_engine: BaseOcrEngine,
        status_reporter: StatusReporter,
        timeout_seconds: float | None = None,
    ) -> None:
        self._ocr_engine = ocr_engine
        self._status_reporter = status_reporter
        self._timeout_seconds = timeout_seconds

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.ocr_operation is None:
            raise ValueError("PipelineContext.ocr_operation must be set before waiting for OCR")
        Log.info("Waiting for OCR to complete", contract_id=context.contract_id)
        self._ocr_engine.wait(context.ocr_operation, self._timeout_seconds)
        Log.info("OCR complete", contract_id=context.contract_id)
        self._status_reporter.report_progress(
            context.contract_id, context.status, PROGRESS_OCR_COMPLETE
        )
        return context


class MarkExtractingStep(PipelineStep):
    def __init__(self, status_reporter: StatusReporter) -> None:
        self._status_reporter = status_reporter

    def run(self, context: PipelineContext) -> PipelineContext:
        context.status = ContractStatus.EXTRACTING
        self._status_reporter.mark_extracting(context.contract_id)
        return context


class LoadShardsStep(PipelineStep):
    def __init__(self, shard_loader: ShardLoader) -> None:
        self._shard_loader = shard_loader

    def run(self, context: PipelineContext) -> PipelineContext:
        prefix = context.output_prefix or ocr_output_prefix(context.contract_id)
        context.shards = self._shard_loader.load(prefix)
        Log.info(f"Found {len(context.shards)} OCR shards", contract_id=context.contract_id)
        return context


class ReassembleStep(PipelineStep):
    def __init__(self, status_reporter: StatusReporter) -> None:
        self._status_reporter = status_reporter

    def run(self, context: PipelineContext) -> PipelineContext:
        context.assembled_text = reassemble(context.shards)
        Log.info(
            f"Assembled {len(context.assembled_text)} characters of text",
            contract_id=context.contract_id,
        )
        self._status_reporter.report_progress(
            context.contract_id, context.status, PROGRESS_REASSEMBLED
        )
        return context


class PersistAssembledTextStep(PipelineStep):
    def __init__(self, blob_store: BaseBlobStore) -> None:
        self._blob_store = blob_store

    def run(self, context: PipelineContext) -> PipelineContext:
        path = assembled_text_path(context.contract_id)
        self._blob_store.write(path, context.assembled_text.encode("utf-8"), "text/plain")
        Log.debug(f"Assembled text saved to {path}", contract_id=context.contract_id)
        return context


class ExtractClausesStep(PipelineStep):
    def __init__(self, extractor: BaseClauseExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.extraction_result = self._extractor.extract(context.assembled_text)
        return context


class MarkCompletedStep(PipelineStep):
    def __init__(self, status_reporter: StatusReporter) -> None:
        self._status_reporter = status_reporter

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction_result is None:
            raise ValueError("PipelineContext.extraction_result must be set before completion")
        context.status = ContractStatus.COMPLETED
        self._status_reporter.mark_completed(context.contract_id, context.extraction_result)
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, status_reporter: StatusReporter) -> None:
        self._status_reporter = status_reporter

    def run(self, context: PipelineContext) -> PipelineContext:
        Log.error(
            f"Contract marked as failed during {context.status.value}: {context.error_message}",
            contract_id=context.contract_id,
        )
        context.status = ContractStatus.FAILED
        self._status_reporter.mark_failed(context.contract_id)
        return context
