"""Configuration management for agentdesk."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from AGENTDESK_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="AGENTDESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    workspace_path: Path = Field(default=Path("./workspace"))
    database_path: Path = Field(default=Path("./agentdesk.db"))

    # Chunking
    chunk_size: int = Field(default=1000, ge=1, description="Line-packing threshold in characters")
    max_content_length: int = Field(default=10000, ge=1, description="Hard cap on stored chunk text")
    min_chunk_chars: int = Field(default=10, ge=0, description="Outline chunks shorter than this are dropped")
    context_chars: int = Field(default=100, ge=0)
    preview_chars: int = Field(default=200, ge=0)

    # Query defaults
    search_limit: int = Field(default=20, ge=1)
    activity_page_size: int = Field(default=50, ge=1)

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)

    # Logging
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
