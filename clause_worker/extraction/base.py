from abc import ABC, abstractmethod

from clause_worker.extraction.models import ClauseExtractionResult


class BaseClauseExtractor(ABC):
    """Contract for clause extraction strategies."""

    name: str = "extractor"

    @abstractmethod
    def extract(self, text: str) -> ClauseExtractionResult:
        """Extract the indemnification and termination-for-convenience clauses.

        Args:
            text: Assembled contract text.

        Returns:
            ClauseExtractionResult with both fields populated.

        Raises:
            ClauseExtractionError: if this strategy cannot produce a result.
        """
