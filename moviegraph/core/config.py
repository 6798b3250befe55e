"""
Configuration management for moviegraph.

This module centralizes environment-driven configuration using Pydantic's
`BaseSettings`. The CLI, database manager and reset helpers all consume the
shared `settings` instance.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AnyUrl, Field, NonNegativeFloat, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration sourced from environment variables."""

    # General application settings
    APP_NAME: str = "moviegraph"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field("development", pattern=r"^(development|staging|production)$")
    LOG_LEVEL: str = "INFO"

    # Database connection
    NEO4J_URI: AnyUrl = Field("neo4j://localhost:7687")
    NEO4J_USER: str = "neo4j"
    NEO4J_PASSWORD: str = "password"
    NEO4J_DATABASE: Optional[str] = None

    # Reset before the tour
    RESET_ON_START: bool = True
    CONNECT_RETRIES: PositiveInt = 15
    CONNECT_RETRY_DELAY_SECONDS: NonNegativeFloat = 2.0

    # Tracing
    TRACING_ENABLED: bool = False
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[AnyUrl] = None
    OTEL_EXPORTER_OTLP_HEADERS: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    @field_validator("LOG_LEVEL", mode="before")
    def _normalize_level(cls, value: str) -> str:
        return str(value).strip().upper()

    @field_validator("NEO4J_DATABASE", mode="before")
    def _blank_database(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value


@lru_cache()
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


# Singleton-style settings instance for modules that prefer direct access.
settings = get_settings()
