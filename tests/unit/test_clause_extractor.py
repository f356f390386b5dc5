import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from clause_worker.extraction.clause_extractor import DEFAULT_SYSTEM_PROMPT, ClauseExtractor
from clause_worker.extraction.exceptions import (
    ClauseExtractionNetworkError,
    ClauseResponseParseError,
)
from clause_worker.extraction.models import NO_INDEMNIFICATION_CLAUSE, NO_TERMINATION_CLAUSE


def _make_extractor(
    response: str | None = None,
    **kwargs: object,
) -> tuple[ClauseExtractor, MagicMock]:
    client = MagicMock()
    client.create_chat_completion.return_value = response or json.dumps(
        {"indemnificationText": "Indemnity clause.", "terminationText": "Exit clause."}
    )
    extractor = ClauseExtractor(client=client, model="gpt-test", **kwargs)
    return extractor, client


class TestClauseExtractor:
    def test_returns_parsed_clauses(self) -> None:
        extractor, _client = _make_extractor()

        result = extractor.extract("Some contract text")

        assert result.indemnification_text == "Indemnity clause."
        assert result.termination_text == "Exit clause."

    def test_sends_system_and_user_prompt(self) -> None:
        extractor, client = _make_extractor()

        extractor.extract("The contract body")

        kwargs = client.create_chat_completion.call_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["system_prompt"] == DEFAULT_SYSTEM_PROMPT
        assert "The contract body" in kwargs["user_prompt"]
        assert NO_INDEMNIFICATION_CLAUSE in kwargs["user_prompt"]
        assert NO_TERMINATION_CLAUSE in kwargs["user_prompt"]
        assert '"indemnificationText"' in kwargs["user_prompt"]

    def test_truncates_contract_text(self) -> None:
        extractor, client = _make_extractor(char_limit=10)

        extractor.extract("0123456789ABCDEFGHIJ")

        prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "0123456789" in prompt
        assert "ABCDEFGHIJ" not in prompt

    @pytest.mark.parametrize(
        ("configured", "expected"),
        [(0.0, 0.0), (0.1, 0.1), (0.7, 0.2), (-1.0, 0.0)],
    )
    def test_temperature_is_clamped(self, configured: float, expected: float) -> None:
        extractor, client = _make_extractor(temperature=configured)

        extractor.extract("text")

        assert client.create_chat_completion.call_args.kwargs["temperature"] == expected

    def test_custom_prompt_template(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("Find clauses in: {contract_text}", encoding="utf-8")
        extractor, client = _make_extractor(prompt_template_path=template)

        extractor.extract("ABC")

        assert client.create_chat_completion.call_args.kwargs["user_prompt"] == (
            "Find clauses in: ABC"
        )


class TestClauseExtractorErrors:
    def test_unparseable_response_raises(self) -> None:
        extractor, _client = _make_extractor("no json here")

        with pytest.raises(ClauseResponseParseError):
            extractor.extract("text")

    def test_client_error_propagates(self) -> None:
        extractor, client = _make_extractor()
        client.create_chat_completion.side_effect = ClauseExtractionNetworkError("down")

        with pytest.raises(ClauseExtractionNetworkError, match="down"):
            extractor.extract("text")
