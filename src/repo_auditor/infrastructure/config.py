"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Summarization is optional: without a key analyses carry no summary.
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-3.5-turbo"
    summary_max_tokens: int = 300
    max_readme_tokens: int = 12_000
    llm_timeout_seconds: float = 30.0

    github_token: SecretStr | None = None
    github_api_url: str = "https://api.github.com"
    http_timeout_seconds: float = 15.0

    session_secret: SecretStr
    session_cookie_name: str = "session"
    session_algorithm: str = "HS256"

    cors_origins: list[str] = ["http://localhost:5173"]
    environment: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
