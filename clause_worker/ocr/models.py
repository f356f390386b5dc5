from dataclasses import dataclass
from typing import Any


@dataclass
class OcrOperation:
    """Handle for a submitted OCR request."""

    source_uri: str
    output_uri: str
    operation: Any = None  # provider long-running operation, None when already done


@dataclass(frozen=True)
class OcrShard:
    """One raw OCR result file, as downloaded from the blob store."""

    name: str
    content: bytes
