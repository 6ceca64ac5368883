"""
Application Settings
===================

Application settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

from tablesnap.models.schemas import ThemeName


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=False, description="Debug mode, forces DEBUG logging")

    # Rendering Configuration
    default_theme: ThemeName = Field(default=ThemeName.DARK, description="Default color theme")
    font_size: float = Field(default=14.0, gt=0, description="Default font size in points")
    padding: float = Field(default=10.0, ge=0, description="Default cell padding in pixels")
    font_path: Optional[Path] = Field(default=None, description="TrueType/OpenType font file")

    # Emoji Configuration
    emoji_enabled: bool = Field(default=True, description="Draw pictographs from emoji images")
    emoji_cache_dir: Path = Field(
        default=Path.home() / ".cache" / "tablesnap" / "twemoji",
        description="Directory holding the installed emoji pack",
    )
    emoji_bundle_dir: Optional[Path] = Field(
        default=None, description="Directory holding a minimal bundled emoji set"
    )
    twemoji_url: str = Field(
        default="https://github.com/twitter/twemoji/archive/refs/heads/master.zip",
        description="Emoji pack archive URL",
    )
    download_timeout: int = Field(default=60, gt=0, description="Download timeout in seconds")

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional rotating log file")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("default_theme", mode="before")
    @classmethod
    def normalize_theme(cls, v):
        """Accept theme names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="TABLESNAP_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
