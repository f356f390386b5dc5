"""Reassembles OCR result shards into one linear document text."""

import json
from collections.abc import Sequence
from typing import Any

from clause_worker.logging.logger import Log
from clause_worker.ocr.models import OcrShard


def reassemble(shards: Sequence[OcrShard]) -> str:
    """Concatenate the text of every shard, in the given order.

    Shard texts are separated by a blank line and the result is trimmed.
    A shard that is not valid JSON or has an unexpected shape is logged and
    skipped; it never aborts the document.
    """
    contributions: list[str] = []
    for shard in shards:
        try:
            payload = json.loads(shard.content)
            text = extract_shard_text(payload)
        except Exception as exc:
            Log.warning(f"Skipping unreadable OCR shard {shard.name}: {exc}")
            continue
        if not text:
            Log.warning(f"No text content could be extracted from {shard.name}")
            continue
        contributions.append(text)
    return "\n\n".join(contributions).strip()


def extract_shard_text(payload: Any) -> str:
    """Text of one decoded shard.

    Uses the flattened fullTextAnnotation.text of each response when present,
    otherwise rebuilds the text from the page/block/paragraph/word/symbol tree.
    """
    responses = _as_list(_as_dict(payload).get("responses"))
    text = "".join(
        f"{full_text}\n\n" for full_text in map(_full_text, responses) if full_text
    )
    if not text:
        text = _walk_structure(responses)
    return text.strip()


def _full_text(response: Any) -> str:
    annotation = _as_dict(_as_dict(response).get("fullTextAnnotation"))
    text = annotation.get("text")
    return text if isinstance(text, str) else ""


def _walk_structure(responses: list[Any]) -> str:
    parts: list[str] = []
    for response in responses:
        annotation = _as_dict(_as_dict(response).get("fullTextAnnotation"))
        for page in _as_list(annotation.get("pages")):
            blocks = _as_list(_as_dict(page).get("blocks"))
            if not blocks:
                continue
            for block in blocks:
                for paragraph in _as_list(_as_dict(block).get("paragraphs")):
                    for word in _as_list(_as_dict(paragraph).get("words")):
                        symbols = _as_list(_as_dict(word).get("symbols"))
                        if not symbols:
                            continue
                        parts.extend(_symbol_text(symbol) for symbol in symbols)
                        parts.append(" ")
                    parts.append("\n")
            parts.append("\n\n")
    return "".join(parts)


def _symbol_text(symbol: Any) -> str:
    text = _as_dict(symbol).get("text")
    return text if isinstance(text, str) else ""


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []
