"""Application configuration."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Chapter Translator"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Output files (translated_{start}_{end}.json)
    output_dir: Path = Path.cwd() / "data" / "outputs"

    # Primary translation (LLM)
    gemini_api_key: Optional[str] = None
    primary_provider: str = "gemini"
    default_model: str = "gemini-2.5-flash"
    default_title_model: str = "gemini-2.5-flash"

    # Pacing between chapters (milliseconds)
    default_delay_ms: int = 4000

    # Fallback translation (Google free web endpoint)
    fallback_endpoint: str = "https://translate.googleapis.com/translate_a/single"
    fallback_source_language: str = "zh-CN"
    fallback_target_language: str = "en"
    fallback_chunk_size: int = 1000  # characters
    fallback_timeout: float = 30.0
    title_fallback_concurrency: int = 4

    # Finished API batches kept in memory (oldest evicted first)
    max_finished_batches: int = 50

    # Input document
    input_timeout: float = 60.0
    input_fetch_attempts: int = 3

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
