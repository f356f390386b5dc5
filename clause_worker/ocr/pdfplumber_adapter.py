import io

import pdfplumber

from clause_worker.ocr.text_layer import TextLayerOcrEngine


class PdfPlumberOcrEngine(TextLayerOcrEngine):
    """Text-layer OCR engine using pdfplumber."""

    def _page_texts(self, pdf_bytes: bytes) -> list[str]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            return [page.extract_text() or "" for page in pdf.pages]
