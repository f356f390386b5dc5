from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class ContractStatus(StrEnum):
    """Lifecycle of a contract record: pending -> processing -> extracting -> terminal."""

    PENDING = "pending"
    PROCESSING = "processing"
    EXTRACTING = "extracting"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({ContractStatus.COMPLETED, ContractStatus.FAILED})


@dataclass
class ContractRecord:
    """Represents a row from the contracts table."""

    id: str
    file_name: str
    status: ContractStatus
    progress: int = 0
    indemnification_text: str | None = None
    termination_text: str | None = None
    uploaded_at: datetime | None = None


@dataclass
class JobRecord:
    """Represents a row from the contract_jobs table."""

    id: int
    contract_id: str
    source_uri: str
    status: str
    attempts: int
    error_message: str | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
