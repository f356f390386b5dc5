class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class ContractNotFoundError(ProcessorError):
    """Raised when a contract record cannot be found in the record store."""


class ContractProcessingError(ProcessorError):
    """Raised after a pipeline run has been driven to the failed state."""
