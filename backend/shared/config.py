"""
Centralized configuration for the Gatehouse backend.

All settings are loaded from environment variables with sensible defaults.
Only the composition root (api/dependencies.py) and the app factory read
these; components receive plain values through their constructors.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder shipped in .env examples; refused in production.
INSECURE_JWT_SECRET = "your-secret-key-change-this-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Gatehouse API"
    app_version: str = "0.1.0"
    environment: Literal["development", "production"] = "development"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = ["Origin", "Content-Length", "Content-Type", "Authorization"]

    # Logging
    log_level: str = "DEBUG"
    log_format: Literal["console", "json"] = "console"

    # Authentication
    jwt_secret: str = Field(default=INSECURE_JWT_SECRET, min_length=1)
    jwt_expiration_seconds: int = Field(default=24 * 60 * 60, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # User store
    user_store_backend: Literal["memory", "supabase"] = "memory"
    users_table: str = "users"

    # Supabase (only read when user_store_backend == "supabase")
    supabase_url: str = ""
    supabase_service_role_key: str = ""

    @model_validator(mode="after")
    def _check_production_secret(self) -> "Settings":
        if self.environment == "production" and self.jwt_secret == INSECURE_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set to a real secret in production")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def jwt_expiration(self) -> timedelta:
        """Token time-to-live as a timedelta."""
        return timedelta(seconds=self.jwt_expiration_seconds)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
