"""Offline completion client.

Returns a fixed answer in the expected JSON shape without network calls.
Useful for local development and as a template for new provider adapters:
implement BaseCompletionClient and register the provider in ClauseExtractorFactory.
"""

import json
from typing import ClassVar

from clause_worker.extraction.client_base import BaseCompletionClient
from clause_worker.extraction.models import NO_INDEMNIFICATION_CLAUSE, NO_TERMINATION_CLAUSE


class ExampleClientAdapter(BaseCompletionClient):
    DEFAULT_RESPONSE: ClassVar[dict[str, str]] = {
        "indemnificationText": NO_INDEMNIFICATION_CLAUSE,
        "terminationText": NO_TERMINATION_CLAUSE,
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt
        return json.dumps(self.DEFAULT_RESPONSE)
