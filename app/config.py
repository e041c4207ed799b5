"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings


# Chat-completion models the gateway is allowed to request
ALLOWED_MODELS: List[str] = [
    "gpt-4.1-mini",    # Default - supports strict json_schema output
    "gpt-4.1",
    "gpt-4o-mini",
]

DEFAULT_MODEL = "gpt-4.1-mini"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI-compatible chat completions API
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = DEFAULT_MODEL
    llm_timeout_seconds: float = 60.0

    # App Settings
    app_env: str = "development"
    debug: bool = True
    cors_origins: List[str] = ["*"]

    # Locations
    sort_locations_by_priority: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def validate_model(model: str) -> bool:
    """Check if a model is in the allowed set."""
    return model in ALLOWED_MODELS


def get_model(settings: Settings) -> str:
    """Configured model, or the default when the configured one is not allowed."""
    if validate_model(settings.openai_model):
        return settings.openai_model
    return DEFAULT_MODEL
