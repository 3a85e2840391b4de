"""Configuration management using Pydantic Settings."""

import os
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Widget assets
    base_url: str = Field(
        default_factory=lambda: os.environ.get("BASE_URL", "https://calcufy-calculator.vercel.app"),
        description="Host serving the bundled widget scripts and styles (BASE_URL env var)",
    )
    widget_source: Literal["remote", "local"] = Field(
        "remote",
        description="Where widget markup comes from: generated shells pointing at BASE_URL, or pre-built HTML in ASSETS_DIR",
    )
    assets_dir: str = Field(
        "assets",
        description="Directory holding pre-built widget HTML for the 'local' widget source",
    )

    # HTTP transport
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = ["*"]

    # Application Settings
    debug: bool = Field(
        default_factory=lambda: os.environ.get("DEBUG", "False").lower() == "true",
        description="Debug mode from DEBUG env var (default: False)",
    )
    log_level: str = Field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO"),
        description="Logging level from LOG_LEVEL env var (default: INFO)",
    )

    # MCP identity
    server_name: str = "calcufy-calculator"
    server_version: str = "1.0.0"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
