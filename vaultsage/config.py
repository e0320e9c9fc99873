"""Configuration management using pydantic-settings."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI - an empty key only fails when a completion is requested
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Vault used when a command is not given an explicit path
    vault_path: Path | None = None

    # Category descriptions are rebuilt after this many seconds
    category_cache_ttl: int = 3600

    # Notes included in a Q&A context
    max_context_notes: int = 20

    @field_validator("vault_path")
    @classmethod
    def validate_vault_path(cls, v: Path | None) -> Path | None:
        """Ensure vault path, when given, exists and is a directory."""
        if v is None:
            return v
        if not v.exists():
            raise ValueError(f"Vault path does not exist: {v}")
        if not v.is_dir():
            raise ValueError(f"Vault path is not a directory: {v}")
        return v.resolve()

    @field_validator("category_cache_ttl", "max_context_notes")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Reject zero or negative limits."""
        if v <= 0:
            raise ValueError(f"Value must be positive: {v}")
        return v

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key.strip())


def get_settings() -> Settings:
    """Load settings from environment."""
    return Settings()
