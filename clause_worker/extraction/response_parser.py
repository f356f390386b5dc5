"""Turns a free-text model answer into a ClauseExtractionResult."""

import json
import re
from typing import Any

from clause_worker.extraction.exceptions import ClauseResponseParseError
from clause_worker.extraction.models import (
    NO_INDEMNIFICATION_CLAUSE,
    NO_TERMINATION_CLAUSE,
    ClauseExtractionResult,
)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def parse_clause_response(raw: str) -> ClauseExtractionResult:
    """Parse the model answer.

    The outermost {...} span is parsed when one exists, otherwise the whole
    answer. Missing, blank or non-string clause fields fall back to their
    sentinel independently.

    Raises:
        ClauseResponseParseError: if neither attempt yields a JSON object.
    """
    match = _JSON_OBJECT_RE.search(raw)
    candidate = match.group(0) if match else raw
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise ClauseResponseParseError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ClauseResponseParseError("JSON response must be an object")

    return ClauseExtractionResult(
        indemnification_text=_clause_or_sentinel(
            parsed.get("indemnificationText"), NO_INDEMNIFICATION_CLAUSE
        ),
        termination_text=_clause_or_sentinel(
            parsed.get("terminationText"), NO_TERMINATION_CLAUSE
        ),
    )


def _clause_or_sentinel(value: Any, sentinel: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return sentinel
