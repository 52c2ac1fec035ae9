"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

PATTERN: Settings Singleton
===========================
A single Settings instance is cached using @lru_cache, so:
- Configuration is loaded once at startup
- All parts of the app use the same configuration
- .env is read only once

Usage:
    from bookclub.config import get_settings

    settings = get_settings()
    print(settings.storage_backend)

Storage Backends:
=================
- firestore: Hosted Firestore database via firebase-admin (production)
- memory: In-process store for local development and tests
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    SECURITY NOTE:
    ==============
    - secret_key signs every bearer token issued by /login
    - Placeholder values will raise errors at startup
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Book Club API",
        description="Application name displayed in docs and logs"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, auto-reload)"
    )
    api_version: str = Field(
        default="v1",
        description="API version reported in docs and health checks"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=8080,
        description="Port to bind the server to"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )

    # -------------------------------------------------------------------------
    # Storage Settings
    # -------------------------------------------------------------------------
    storage_backend: str = Field(
        default="firestore",
        description="Document store backend: firestore or memory"
    )
    firebase_credentials_path: Optional[str] = Field(
        default=None,
        description="Path to a Firebase service account JSON (ADC when unset)"
    )
    firebase_project_id: Optional[str] = Field(
        default=None,
        description="Google Cloud project ID (inferred from credentials when unset)"
    )
    external_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for every store, identity and book catalog call"
    )

    # -------------------------------------------------------------------------
    # Book Catalog Settings
    # -------------------------------------------------------------------------
    books_api_url: str = Field(
        default="https://www.googleapis.com/books/v1/volumes",
        description="Google Books volumes endpoint"
    )
    books_api_key: Optional[str] = Field(
        default=None,
        description="Optional Google Books API key"
    )
    books_max_page_size: int = Field(
        default=40,
        ge=1,
        description="Largest page size accepted by /books/search"
    )

    # -------------------------------------------------------------------------
    # Security Settings
    # -------------------------------------------------------------------------
    secret_key: str = Field(
        default="REPLACE_WITH_YOUR_GENERATED_SECRET_KEY",
        description="Secret key used to sign bearer tokens"
    )
    jwt_issuer: str = Field(
        default="bookclub",
        description="Issuer claim written into and required from bearer tokens"
    )
    token_expire_minutes: Optional[int] = Field(
        default=None,
        ge=1,
        description="Bearer token lifetime; tokens never expire when unset"
    )
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:8080",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def uses_memory_store(self) -> bool:
        """Check if the in-process store is selected."""
        return self.storage_backend == "memory"

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """
        Validate that secret_key is not a placeholder value.

        The application will fail to start if SECRET_KEY is not properly set.

        Raises:
            ValueError: If secret key is a placeholder or too short
        """
        placeholder_indicators = [
            "REPLACE_WITH",
            "change-me",
            "your-secret",
            "generate-with",
        ]

        for indicator in placeholder_indicators:
            if indicator.lower() in v.lower():
                raise ValueError(
                    "SECRET_KEY contains a placeholder value. "
                    "Generate a secure key with: openssl rand -hex 32"
                )

        if len(v) < 32:
            raise ValueError(
                "SECRET_KEY must be at least 32 characters long. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        return v

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Validate storage backend is a known value."""
        valid_backends = {"firestore", "memory"}
        if v.lower() not in valid_backends:
            raise ValueError(f"storage_backend must be one of {valid_backends}")
        return v.lower()


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    First call creates the Settings instance (reading .env and validating);
    subsequent calls return the cached instance.
    """
    return Settings()
