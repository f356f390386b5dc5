import httpx
import openai

from clause_worker.extraction.client_base import BaseCompletionClient
from clause_worker.extraction.exceptions import (
    ClauseExtractionError,
    ClauseExtractionNetworkError,
)


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on the OpenAI-compatible chat API.

    Single call, no streaming and no structured-output request; the caller
    parses the free-text answer.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ClauseExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ClauseExtractionNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ClauseExtractionError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise ClauseExtractionError("Empty response from AI service")
        return content
