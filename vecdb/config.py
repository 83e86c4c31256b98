"""Configuration management with Pydantic settings and environment overrides."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vecdb.utils.paths import DEFAULT_DB_NAME

EmbedderName = Literal["hashing", "sbert"]


class Settings(BaseSettings):
    """vecdb configuration settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="VECDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path | None = Field(
        default=None,
        description="Directory for stores opened without an explicit path (defaults to the cwd)",
    )

    database_name: str = Field(
        default=DEFAULT_DB_NAME,
        description="File name used when a store path resolves to a directory",
    )

    # Embedding settings
    embedder: EmbedderName = Field(
        default="hashing",
        description="Embedding backend: hashing (offline, deterministic) or sbert",
    )

    embedding_dimensions: int = Field(
        default=64,
        ge=1,
        description="Vector dimensionality for the hashing embedder",
    )

    sbert_model: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="Model id for the sentence-transformers embedder",
    )

    # Index settings
    hnsw_m: int = Field(
        default=8,
        ge=2,
        description="HNSW graph connectivity (M)",
    )

    hnsw_ef_construction: int = Field(
        default=200,
        ge=1,
        description="HNSW construction-time candidate list size",
    )

    hnsw_ef_search: int = Field(
        default=64,
        ge=1,
        description="HNSW query-time candidate list size (raised to k when smaller)",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI (--verbose forces DEBUG)",
    )

    def get_data_dir(self) -> Path:
        """Return the directory stores default into, creating it if configured."""
        if self.data_dir is None:
            return Path.cwd()
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
