"""
Centralized configuration for the Userbase backend.

All settings are loaded from environment variables prefixed with USERBASE_
(or a .env file) with sensible defaults. Secrets have no defaults and are
checked by the factories that need them.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="USERBASE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Userbase API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Database
    database_url: str = ""
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout: float = 30.0  # seconds to wait for a free connection
    db_worker_threads: int = 10

    # Security
    password_salt: str = ""
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 30
    token_leeway_seconds: int = 60


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
