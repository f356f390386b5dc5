from clause_worker.extraction.base import BaseClauseExtractor
from clause_worker.extraction.chain import ClauseExtractionChain
from clause_worker.extraction.clause_extractor import ClauseExtractor
from clause_worker.extraction.factory import ClauseExtractorFactory
from clause_worker.extraction.keyword_extractor import (
    KeywordClauseExtractor,
    extract_clauses_by_keyword,
)
from clause_worker.extraction.models import ClauseExtractionResult

__all__ = [
    "BaseClauseExtractor",
    "ClauseExtractionChain",
    "ClauseExtractionResult",
    "ClauseExtractor",
    "ClauseExtractorFactory",
    "KeywordClauseExtractor",
    "extract_clauses_by_keyword",
]
