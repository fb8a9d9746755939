# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.APPLICATION_ROOT)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Every value has a development default, so the service starts with no
# environment at all.
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    SERVICE_NAME: str = Field(
        default="api.sjaplus.top",
        description="Public name of this API, echoed by the /test endpoint"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    BACKEND_PORT: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="https://sjaplus.top",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    APPLICATION_ROOT: str = Field(
        default="./var/project-apply",
        description="Directory under which each submission gets its own folder"
    )

    DISPLAY_ROOT: str = Field(
        default="./var/project-display",
        description="Directory holding approved avatar/ and poster/ images"
    )

    # -------------------------------------------------------------------------
    # Upload Limits
    # -------------------------------------------------------------------------

    MAX_REQUEST_SIZE_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum size of a whole multipart submission in MB"
    )

    MAX_COVER_SIZE_MB: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Maximum cover image size in MB"
    )

    MAX_AVATAR_SIZE_MB: int = Field(
        default=2,
        ge=1,
        le=100,
        description="Maximum avatar image size in MB"
    )

    ALLOWED_IMAGE_EXTENSIONS: str = Field(
        default=".jpg,.jpeg,.png,.webp",
        description="Allowed image file extensions (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "https://sjaplus.top, http://localhost:3000" -> ["https://sjaplus.top", "http://localhost:3000"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def allowed_image_extensions_list(self) -> list[str]:
        """
        Parse ALLOWED_IMAGE_EXTENSIONS string into a list.

        Example: ".jpg, .PNG" -> [".jpg", ".png"]
        """
        return [ext.strip().lower() for ext in self.ALLOWED_IMAGE_EXTENSIONS.split(",") if ext.strip()]

    @property
    def max_request_size_bytes(self) -> int:
        return self.MAX_REQUEST_SIZE_MB * 1024 * 1024

    @property
    def max_cover_size_bytes(self) -> int:
        return self.MAX_COVER_SIZE_MB * 1024 * 1024

    @property
    def max_avatar_size_bytes(self) -> int:
        return self.MAX_AVATAR_SIZE_MB * 1024 * 1024

    @property
    def application_root_path(self) -> Path:
        return Path(self.APPLICATION_ROOT)

    @property
    def display_root_path(self) -> Path:
        return Path(self.DISPLAY_ROOT)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
