from google.api_core import exceptions as gexc
from google.cloud import vision

from clause_worker.logging.logger import Log
from clause_worker.ocr.base import BaseOcrEngine
from clause_worker.ocr.exceptions import OcrError, OcrSubmissionError, OcrTimeoutError
from clause_worker.ocr.models import OcrOperation


class GoogleVisionOcrEngine(BaseOcrEngine):
    """Asynchronous PDF text detection with Google Cloud Vision.

    Vision reads the PDF from Cloud Storage and writes one JSON shard per
    batch_size pages under the output URI.
    """

    def __init__(
        self,
        *,
        batch_size: int = 50,
        client: vision.ImageAnnotatorClient | None = None,
    ) -> None:
        self._batch_size = batch_size
        self._client = client if client is not None else vision.ImageAnnotatorClient()

    def submit(self, source_uri: str, output_uri: str) -> OcrOperation:
        request = vision.AsyncAnnotateFileRequest(
            features=[vision.Feature(type_=vision.Feature.Type.DOCUMENT_TEXT_DETECTION)],
            input_config=vision.InputConfig(
                gcs_source=vision.GcsSource(uri=source_uri),
                mime_type="application/pdf",
            ),
            output_config=vision.OutputConfig(
                gcs_destination=vision.GcsDestination(uri=output_uri),
                batch_size=self._batch_size,
            ),
        )
        try:
            operation = self._client.async_batch_annotate_files(requests=[request])
        except gexc.GoogleAPIError as exc:
            raise OcrSubmissionError(f"Vision rejected OCR request for {source_uri}: {exc}") from exc
        Log.info(f"Submitted OCR for {source_uri}, results to {output_uri}")
        return OcrOperation(source_uri=source_uri, output_uri=output_uri, operation=operation)

    def wait(self, operation: OcrOperation, timeout_seconds: float | None = None) -> None:
        if operation.operation is None:
            return
        try:
            operation.operation.result(timeout=timeout_seconds)
        except TimeoutError as exc:
            raise OcrTimeoutError(
                f"OCR for {operation.source_uri} did not finish within {timeout_seconds}s"
            ) from exc
        except gexc.GoogleAPIError as exc:
            raise OcrError(f"OCR for {operation.source_uri} failed: {exc}") from exc
