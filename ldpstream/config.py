"""Configuration for ldpstream.

Values come from ``LDPSTREAM_*`` environment variables (or a ``.env`` file)
and fall back to the defaults below.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProjectionSettings(BaseSettings):
    """Projection engine configuration."""

    base_uri: str = Field(
        default="http://localhost:8080/rest",
        description="External URI of the repository root",
    )
    repository_namespace: str = Field(
        default="http://fedora.info/definitions/v4/repository#",
        description="Namespace for repository terms and message headers",
    )
    hash_segment: str = Field(default="#", description="Reserved fragment child name")
    log_level: str = Field(default="INFO", description="Log level for the runner")

    model_config = SettingsConfigDict(
        env_prefix="LDPSTREAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Global settings instance
_settings: ProjectionSettings | None = None


def get_settings() -> ProjectionSettings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = ProjectionSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached instance so the next call re-reads the environment."""
    global _settings
    _settings = None
