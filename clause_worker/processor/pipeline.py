from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from clause_worker.database.models import ContractStatus
from clause_worker.extraction.models import ClauseExtractionResult
from clause_worker.ocr.models import OcrOperation, OcrShard


@dataclass(slots=True)
class PipelineContext:
    """In-memory state of one run; authoritative for the rest of that run."""

    contract_id: str
    source_uri: str
    job_id: int | None = None
    status: ContractStatus = ContractStatus.PENDING
    output_prefix: str = ""
    ocr_operation: OcrOperation | None = None
    shards: list[OcrShard] = field(default_factory=list)
    assembled_text: str = ""
    extraction_result: ClauseExtractionResult | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
