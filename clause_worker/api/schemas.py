from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from clause_worker.database.models import ContractRecord


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProcessDocumentRequest(BaseModel):
    id: str | None = None
    filename: str | None = None


class ProcessDocumentData(BaseModel):
    id: str
    filename: str
    timestamp: datetime


class ProcessDocumentResponse(BaseModel):
    success: bool = True
    message: str
    data: ProcessDocumentData


class UploadResponse(CamelModel):
    message: str
    contract_id: str
    file_uri: str


class ContractResponse(CamelModel):
    id: str
    file_name: str
    uploaded_at: datetime | None = None
    status: str
    progress: int
    indemnification_text: str | None = None
    termination_text: str | None = None

    @classmethod
    def from_record(cls, record: ContractRecord) -> "ContractResponse":
        return cls(
            id=record.id,
            file_name=record.file_name,
            uploaded_at=record.uploaded_at,
            status=record.status.value,
            progress=record.progress,
            indemnification_text=record.indemnification_text,
            termination_text=record.termination_text,
        )
