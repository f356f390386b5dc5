"""AI-backed clause extraction strategy."""

from pathlib import Path

from clause_worker.extraction.base import BaseClauseExtractor
from clause_worker.extraction.client_base import BaseCompletionClient
from clause_worker.extraction.models import (
    NO_INDEMNIFICATION_CLAUSE,
    NO_TERMINATION_CLAUSE,
    ClauseExtractionResult,
)
from clause_worker.extraction.prompt_loader import load_prompt_template
from clause_worker.extraction.response_parser import parse_clause_response
from clause_worker.logging.logger import Log

DEFAULT_SYSTEM_PROMPT = (
    "You are a legal document analysis assistant. "
    "Extract specific clauses from contracts accurately."
)
DEFAULT_CHAR_LIMIT = 15000


class ClauseExtractor(BaseClauseExtractor):
    """Asks a language model for both clauses in one call.

    Raises on provider failure or an unparseable answer; the surrounding
    ClauseExtractionChain turns that into the keyword fallback.
    """

    name = "ai"

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        temperature: float = 0.0,
        char_limit: int = DEFAULT_CHAR_LIMIT,
        prompt_template_path: Path | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._char_limit = max(0, char_limit)
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)

    def extract(self, text: str) -> ClauseExtractionResult:
        prompt = self._build_prompt(text)
        Log.debug(f"Clause extraction prompt:\n{prompt}")

        raw_response = self._call_ai(prompt)
        Log.debug(f"AI raw response:\n{raw_response}")

        result = parse_clause_response(raw_response)
        Log.info(f"Clause extraction complete via AI model {self._model}")
        return result

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(
            contract_text=text[: self._char_limit],
            no_indemnification=NO_INDEMNIFICATION_CLAUSE,
            no_termination=NO_TERMINATION_CLAUSE,
        )

    def _call_ai(self, prompt: str) -> str:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
        )
