from abc import ABC, abstractmethod

from clause_worker.ocr.models import OcrOperation


class BaseOcrEngine(ABC):
    """Contract for OCR engines that write JSON result shards under an output URI."""

    @abstractmethod
    def submit(self, source_uri: str, output_uri: str) -> OcrOperation:
        """Start OCR of the PDF at source_uri.

        Raises:
            OcrSubmissionError: if the request is rejected.
        """

    @abstractmethod
    def wait(self, operation: OcrOperation, timeout_seconds: float | None = None) -> None:
        """Block until the shards for operation exist at its output URI.

        Raises:
            OcrTimeoutError: if the wait exceeds timeout_seconds.
            OcrError: if the engine reports a failure.
        """
