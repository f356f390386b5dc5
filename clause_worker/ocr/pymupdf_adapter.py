import pymupdf

from clause_worker.ocr.text_layer import TextLayerOcrEngine


class PyMuPdfOcrEngine(TextLayerOcrEngine):
    """Text-layer OCR engine using PyMuPDF."""

    def _page_texts(self, pdf_bytes: bytes) -> list[str]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            return [page.get_text() for page in doc]
