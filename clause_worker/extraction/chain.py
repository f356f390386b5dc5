from collections.abc import Sequence

from clause_worker.extraction.base import BaseClauseExtractor
from clause_worker.extraction.keyword_extractor import KeywordClauseExtractor
from clause_worker.extraction.models import ClauseExtractionResult
from clause_worker.logging.logger import Log


class ClauseExtractionChain(BaseClauseExtractor):
    """Ordered extraction strategies; the first one to succeed wins.

    The fallback runs on the same text when every strategy fails and must
    not raise. Results are never merged across strategies.
    """

    name = "chain"

    def __init__(
        self,
        strategies: Sequence[BaseClauseExtractor],
        fallback: BaseClauseExtractor | None = None,
    ) -> None:
        self._strategies = list(strategies)
        self._fallback = fallback if fallback is not None else KeywordClauseExtractor()

    @property
    def strategies(self) -> list[BaseClauseExtractor]:
        return list(self._strategies)

    def extract(self, text: str) -> ClauseExtractionResult:
        for strategy in self._strategies:
            try:
                result = strategy.extract(text)
            except Exception as exc:
                Log.warning(f"Clause extraction strategy '{strategy.name}' failed: {exc}")
                continue
            Log.info(f"Clauses extracted by '{strategy.name}' strategy")
            return result

        Log.info(f"Falling back to '{self._fallback.name}' clause extraction")
        return self._fallback.extract(text)
