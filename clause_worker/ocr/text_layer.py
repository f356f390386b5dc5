import json
from abc import abstractmethod

from clause_worker.logging.logger import Log
from clause_worker.ocr.base import BaseOcrEngine
from clause_worker.ocr.exceptions import OcrSubmissionError
from clause_worker.ocr.models import OcrOperation
from clause_worker.storage.base import BaseBlobStore
from clause_worker.storage.exceptions import BlobStoreError
from clause_worker.storage.models import BlobHandle


class TextLayerOcrEngine(BaseOcrEngine):
    """Reads a PDF's embedded text layer and writes Vision-shaped shards.

    Runs synchronously inside submit(); wait() returns immediately. Lets the
    pipeline run end to end without Google Cloud (local blob store, tests).
    """

    def __init__(self, blob_store: BaseBlobStore, batch_size: int = 50) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._blob_store = blob_store
        self._batch_size = batch_size

    @abstractmethod
    def _page_texts(self, pdf_bytes: bytes) -> list[str]:
        """Return the text of every page, in page order."""

    def submit(self, source_uri: str, output_uri: str) -> OcrOperation:
        try:
            source_path = self._blob_store.path_from_uri(source_uri)
            output_prefix = self._blob_store.path_from_uri(output_uri)
            pdf_bytes = self._blob_store.download(BlobHandle(name=source_path))
        except BlobStoreError as exc:
            raise OcrSubmissionError(f"Cannot read source {source_uri}: {exc}") from exc

        try:
            pages = self._page_texts(pdf_bytes)
        except Exception as exc:
            raise OcrSubmissionError(f"Cannot read PDF text from {source_uri}: {exc}") from exc

        if output_prefix and not output_prefix.endswith("/"):
            output_prefix += "/"
        for start in range(0, len(pages), self._batch_size):
            batch = pages[start:start + self._batch_size]
            first, last = start + 1, start + len(batch)
            payload = self._shard_payload(source_uri, batch, first)
            self._blob_store.write(
                f"{output_prefix}output-{first}-to-{last}.json",
                json.dumps(payload).encode("utf-8"),
                "application/json",
            )
        Log.info(f"Wrote text-layer OCR for {len(pages)} pages of {source_uri}")
        return OcrOperation(source_uri=source_uri, output_uri=output_uri)

    def wait(self, operation: OcrOperation, timeout_seconds: float | None = None) -> None:
        _ = operation, timeout_seconds

    @staticmethod
    def _shard_payload(source_uri: str, pages: list[str], first_page: int) -> dict[str, object]:
        responses: list[dict[str, object]] = []
        for offset, text in enumerate(pages):
            response: dict[str, object] = {
                "context": {"uri": source_uri, "pageNumber": first_page + offset},
            }
            if text.strip():
                response["fullTextAnnotation"] = {"text": text}
            responses.append(response)
        return {
            "inputConfig": {"gcsSource": {"uri": source_uri}, "mimeType": "application/pdf"},
            "responses": responses,
        }
