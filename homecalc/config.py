"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - Model and tool calls both have a timeout; tool rounds are capped
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Anthropic
    anthropic_api_key: str = "sk-ant-placeholder"
    anthropic_timeout_seconds: float = Field(default=30.0, gt=0)

    # Agent
    agent_model: str = "claude-sonnet-4-5"
    agent_max_tokens: int = Field(default=1024, ge=64)
    max_tool_rounds: int = Field(default=3, ge=1, le=10)

    # Provider lookup tool
    tool_timeout_seconds: float = Field(default=10.0, gt=0)
    google_places_api_key: str | None = None

    # API
    cors_origins: list[str] = ["http://localhost:9002"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
