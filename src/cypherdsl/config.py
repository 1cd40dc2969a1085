"""Configuration settings for the Cypher DSL.
Uses Pydantic BaseSettings for automatic environment variable loading.
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CYPHER_VERSION = "3.5"


class CypherDslSettings(BaseSettings):
    """Runtime configuration, read from ``CYPHERDSL_*`` environment variables."""

    # Version token emitted after "CYPHER " when a query is rendered
    # without an explicit version
    DEFAULT_CYPHER_VERSION: str = DEFAULT_CYPHER_VERSION

    # Logging
    LOG_LEVEL: str = "WARNING"

    @field_validator("DEFAULT_CYPHER_VERSION")
    @classmethod
    def _version_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("DEFAULT_CYPHER_VERSION may not be null or empty string")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    model_config = SettingsConfigDict(env_prefix="CYPHERDSL_", extra="ignore")


settings = CypherDslSettings()
