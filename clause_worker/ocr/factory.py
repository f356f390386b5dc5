from clause_worker.config.settings import Settings
from clause_worker.ocr.base import BaseOcrEngine
from clause_worker.ocr.google_vision_adapter import GoogleVisionOcrEngine
from clause_worker.ocr.pdfplumber_adapter import PdfPlumberOcrEngine
from clause_worker.ocr.pymupdf_adapter import PyMuPdfOcrEngine
from clause_worker.ocr.text_layer import TextLayerOcrEngine
from clause_worker.storage.base import BaseBlobStore


class OcrEngineFactory:
    """Creates the configured OCR engine."""

    TEXT_LAYER_ENGINES: dict[str, type[TextLayerOcrEngine]] = {
        "pdfplumber": PdfPlumberOcrEngine,
        "pymupdf": PyMuPdfOcrEngine,
    }

    @classmethod
    def create(cls, settings: Settings, blob_store: BaseBlobStore) -> BaseOcrEngine:
        engine = settings.ocr_engine.lower()
        if engine == "google_vision":
            return GoogleVisionOcrEngine(batch_size=settings.ocr_batch_size)
        engine_cls = cls.TEXT_LAYER_ENGINES.get(engine)
        if engine_cls is None:
            raise ValueError(
                f"Unknown OCR engine '{engine}'. Choose from: "
                f"{['google_vision', *cls.TEXT_LAYER_ENGINES]}"
            )
        return engine_cls(blob_store, batch_size=settings.ocr_batch_size)
