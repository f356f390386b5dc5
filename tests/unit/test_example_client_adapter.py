import json

from clause_worker.extraction.example_client_adapter import ExampleClientAdapter
from clause_worker.extraction.models import NO_INDEMNIFICATION_CLAUSE, NO_TERMINATION_CLAUSE
from clause_worker.extraction.response_parser import parse_clause_response


class TestExampleClientAdapter:
    def test_returns_sentinel_json(self) -> None:
        raw = ExampleClientAdapter().create_chat_completion(
            model="example", temperature=0.0, system_prompt="s", user_prompt="u"
        )

        assert json.loads(raw) == {
            "indemnificationText": NO_INDEMNIFICATION_CLAUSE,
            "terminationText": NO_TERMINATION_CLAUSE,
        }

    def test_response_is_parseable(self) -> None:
        raw = ExampleClientAdapter().create_chat_completion(
            model="example", temperature=0.0, system_prompt="s", user_prompt="u"
        )
        result = parse_clause_response(raw)
        assert result.indemnification_text == NO_INDEMNIFICATION_CLAUSE
