from typing import ClassVar

from clause_worker.config.settings import Settings
from clause_worker.extraction.chain import ClauseExtractionChain
from clause_worker.extraction.clause_extractor import ClauseExtractor
from clause_worker.extraction.example_client_adapter import ExampleClientAdapter
from clause_worker.extraction.keyword_extractor import KeywordClauseExtractor
from clause_worker.extraction.openai_client_adapter import OpenAIClientAdapter


class ClauseExtractorFactory:
    """Creates the extraction chain for the configured provider.

    Every chain ends with the keyword fallback; provider "keyword" skips the
    AI strategy entirely.
    """

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> ClauseExtractionChain:
        """Create the configured extraction chain from application settings."""
        provider = settings.extraction_provider.lower()
        fallback = KeywordClauseExtractor()
        if provider == "keyword":
            return ClauseExtractionChain([], fallback=fallback)
        if provider == "example":
            ai = ClauseExtractor(
                client=ExampleClientAdapter(),
                model="example",
                char_limit=settings.clause_prompt_char_limit,
            )
            return ClauseExtractionChain([ai], fallback=fallback)

        client = OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        ai = ClauseExtractor(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.openai_temperature if provider == "openai" else 0.0,
            char_limit=settings.clause_prompt_char_limit,
        )
        return ClauseExtractionChain([ai], fallback=fallback)

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "keyword",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        if provider == "openai":
            return settings.openai_api_key
        return settings.openai_compatible_api_key

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        if provider == "openai":
            return settings.openai_model_name
        return settings.openai_compatible_model_name
