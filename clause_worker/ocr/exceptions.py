class OcrError(Exception):
    """Raised when the OCR engine cannot produce result shards."""


class OcrSubmissionError(OcrError):
    """Raised when the OCR engine rejects or cannot start a request."""


class OcrTimeoutError(OcrError):
    """Raised when OCR does not complete within the configured wait."""
