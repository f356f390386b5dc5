"""Deterministic paragraph-scanning clause extraction."""

import re

from clause_worker.extraction.base import BaseClauseExtractor
from clause_worker.extraction.models import (
    NO_INDEMNIFICATION_CLAUSE,
    NO_TERMINATION_CLAUSE,
    ClauseExtractionResult,
)

INDEMNIFICATION_TERMS = ("indemnif", "liability", "data breach", "security breach")
TERMINATION_STEM = "terminat"
TERMINATION_QUALIFIERS = ("convenience", "at will")

_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")


def extract_clauses_by_keyword(text: str) -> ClauseExtractionResult:
    """Collect matching paragraphs for each clause in one left-to-right pass.

    A paragraph may land in both clauses, one, or neither. An empty clause is
    replaced by its sentinel.
    """
    indemnification: list[str] = []
    termination: list[str] = []

    for paragraph in _PARAGRAPH_BREAK_RE.split(text):
        lowered = paragraph.lower()
        if any(term in lowered for term in INDEMNIFICATION_TERMS):
            indemnification.append(paragraph)
        if TERMINATION_STEM in lowered and any(q in lowered for q in TERMINATION_QUALIFIERS):
            termination.append(paragraph)

    return ClauseExtractionResult(
        indemnification_text="\n\n".join(indemnification).strip() or NO_INDEMNIFICATION_CLAUSE,
        termination_text="\n\n".join(termination).strip() or NO_TERMINATION_CLAUSE,
    )


class KeywordClauseExtractor(BaseClauseExtractor):
    """Strategy wrapper around extract_clauses_by_keyword. Never raises."""

    name = "keyword"

    def extract(self, text: str) -> ClauseExtractionResult:
        return extract_clauses_by_keyword(text)
