"""Configuration management for Heroforge using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="HEROFORGE_",
        extra="ignore",
    )

    # Persistence
    persistence_url: str | None = Field(
        default=None, description="Character endpoint for load/save (GET/POST)"
    )
    persistence_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Total timeout for one persistence request"
    )

    # Rules
    rules_path: Path | None = Field(
        default=None, description="Optional YAML ruleset overriding the bundled one"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format (console or json)")

    @property
    def bundled_rules_path(self) -> Path:
        """Get the path of the ruleset shipped with the package."""
        return Path(__file__).parent / "data" / "rules.yaml"

    @property
    def effective_rules_path(self) -> Path:
        """Get the ruleset path actually used by the loader."""
        return self.rules_path or self.bundled_rules_path


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
