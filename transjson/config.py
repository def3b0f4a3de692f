"""
Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = True

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # ==========================================================================
    # AI / LLM
    # ==========================================================================

    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-5-haiku-latest"

    # Gemini accepts either GOOGLE_API_KEY or GEMINI_API_KEY
    google_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # Used when a caller (CLI) does not name a provider
    llm_provider: str = "openai"
    llm_temperature: float = 0.2

    # ==========================================================================
    # Translation
    # ==========================================================================

    # Upper bound on simultaneous leaf translation calls per document
    translation_max_concurrency: int = 8
    # fail_fast or partial
    translation_failure_policy: str = "fail_fast"

    # ==========================================================================
    # Logging / Error tracking
    # ==========================================================================

    log_level: str = "INFO"
    log_file: str = ""
    sentry_dsn: str = ""

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def gemini_key(self) -> str:
        return self.google_api_key or self.gemini_api_key

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
