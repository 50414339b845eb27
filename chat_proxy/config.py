"""Application settings loaded from environment variables."""

import os
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


API_KEY_ENV_VARS = ("ANTHROPIC_API_KEY", "CLAUDE_KEY", "Claude_key")


class Settings(BaseSettings):
    """Strongly typed application configuration."""

    anthropic_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ANTHROPIC_API_KEY", "CLAUDE_KEY"),
    )
    anthropic_version: str = Field(default="2023-06-01", alias="ANTHROPIC_VERSION")
    chat_model: str = Field(default="claude-3-5-sonnet-20240620", alias="CHAT_MODEL")
    max_tokens: int = Field(default=1024, alias="MAX_TOKENS")
    chat_timeout: float = Field(default=30.0, alias="CHAT_TIMEOUT", description="Seconds")
    max_message_length: int = Field(default=500, alias="MAX_MESSAGE_LENGTH")

    allowed_origins: list[str] = Field(
        default=[
            "https://daniel-portfolio.dev",
            "https://www.daniel-portfolio.dev",
            "http://localhost:5173",
            "http://localhost:3000",
        ],
        alias="ALLOWED_ORIGINS",
    )
    allow_missing_origin: bool = Field(default=True, alias="ALLOW_MISSING_ORIGIN")
    allow_referer_prefix: bool = Field(default=True, alias="ALLOW_REFERER_PREFIX")

    rate_limit_max_requests: int = Field(default=10, alias="RATE_LIMIT_MAX_REQUESTS")
    rate_limit_window_seconds: float = Field(
        default=60.0, alias="RATE_LIMIT_WINDOW_SECONDS", description="Seconds"
    )

    owner_name: str = Field(default="Daniel", alias="OWNER_NAME")
    contact_email: str = Field(default="hello@daniel-portfolio.dev", alias="CONTACT_EMAIL")

    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()


def read_api_key(settings: Settings) -> str | None:
    """Return the provider key, preferring the live process environment.

    The environment is read on every call; keys that only live in `.env`
    come from the cached settings.
    """

    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return settings.anthropic_api_key
