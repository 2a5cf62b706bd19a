# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Services never read settings from a module global: the Settings instance
# is built once at startup and handed to the client factory and services.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 JWT secret used to verify admin tokens"
    )

    # -------------------------------------------------------------------------
    # Storage / Image Upload Settings
    # -------------------------------------------------------------------------

    STORAGE_BUCKET: str = Field(
        default="kue",
        min_length=1,
        description="Supabase Storage bucket holding product and testimonial images"
    )

    MAX_IMAGE_SIZE_MB: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum image upload size in MB"
    )

    ALLOWED_IMAGE_TYPES: str = Field(
        default="image/jpeg,image/jpg,image/png,image/webp,image/gif",
        description="Allowed image MIME types (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Admin Access
    # -------------------------------------------------------------------------

    ADMIN_EMAILS: str = Field(
        default="",
        description="Comma-separated admin emails (empty allows any authenticated user)"
    )

    # -------------------------------------------------------------------------
    # Redis Configuration (view invalidation pub/sub)
    # -------------------------------------------------------------------------

    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for revalidation events"
    )

    REVALIDATION_ENABLED: bool = Field(
        default=True,
        description="Publish view invalidation events after successful mutations"
    )

    REVALIDATION_TOKEN: str = Field(
        default="",
        description="Shared token renderers present when subscribing (empty disables the check)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://kue.id" -> ["http://localhost:3000", "https://kue.id"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def allowed_image_types_list(self) -> list[str]:
        """
        Parse ALLOWED_IMAGE_TYPES string into a list.

        Example: "image/png, image/webp" -> ["image/png", "image/webp"]
        """
        return [
            mime.strip().lower()
            for mime in self.ALLOWED_IMAGE_TYPES.split(",")
            if mime.strip()
        ]

    @property
    def admin_emails_list(self) -> list[str]:
        """Parse ADMIN_EMAILS into a lowercase list (empty when unset)."""
        return [
            email.strip().lower()
            for email in self.ADMIN_EMAILS.split(",")
            if email.strip()
        ]

    @property
    def max_image_size_bytes(self) -> int:
        """Convert MB to bytes for image size validation."""
        return self.MAX_IMAGE_SIZE_MB * 1024 * 1024

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access. This is the recommended pattern for
    pydantic-settings and doubles as a FastAPI dependency.

    Returns:
        Settings: The application settings instance
    """
    return Settings()
