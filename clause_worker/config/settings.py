from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "contracts"
    db_username: str = "contracts"
    db_password: str = "secret"

    max_job_attempts: int = 3
    job_poll_interval_seconds: int = 5
    job_stale_after_seconds: int = 3600

    blob_store: str = "gcs"
    gcs_bucket_name: str = "fb_dioptra_process"
    local_storage_root: str = "/app/files"

    ocr_engine: str = "google_vision"
    ocr_batch_size: int = 50
    ocr_timeout_seconds: int = 1800
    shard_download_workers: int = 4
    persist_assembled_text: bool = True

    extraction_provider: str = "openai"
    clause_prompt_char_limit: int = 15000

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o"
    openai_timeout_seconds: int = 60
    openai_temperature: float = 0.0

    openai_compatible_base_url: str = ""
    openai_compatible_api_key: str = ""
    openai_compatible_model_name: str = ""

    api_host: str = "0.0.0.0"
    api_port: int = 3000
