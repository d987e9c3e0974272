"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    A single instance is built at startup and handed to each component's
    constructor; nothing below the app reads the environment directly.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Slack
    slack_bot_token: str = ""
    request_delay_seconds: float = 1.0
    max_rate_limit_retries: int = 3
    default_retry_after_seconds: float = 30.0
    min_channel_members: int = 3
    min_message_length: int = 20

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    # Knowledge
    data_dir: str = "./data"
    min_confidence: float = 0.6
    default_days_back: int = 30

    # App
    environment: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
