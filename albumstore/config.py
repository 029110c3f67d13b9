"""
Album Store — Application Configuration
=======================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Connection details for both stores and the listen address are deployment
       inputs, not code. Type coercion and validation happen once at import.
How:   Pydantic Settings reads from environment variables (or a .env file)
       and exposes a singleton `settings` object.
Who:   Imported by main.py (lifespan, logging, CORS), database.py and cache.py.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a default suitable for a local MongoDB / Redis pair, so the
    service starts with no configuration at all during development.
    """

    # ── Persistence (MongoDB) ─────────────────────────────────────────────
    mongo_url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URL",
    )
    mongo_database: str = Field(default="albumstore")
    mongo_collection: str = Field(default="albums")

    # What: Server selection timeout applied to the client
    # Bounds how long the startup ping waits before startup is aborted
    mongo_timeout_ms: int = Field(default=5000, ge=100, le=120_000)

    # ── Cache (Redis) ─────────────────────────────────────────────────────
    # What: Enables the cache connection and the startup title projection
    # Off by default: no handler ever reads the cache
    cache_enabled: bool = Field(default=False)
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )

    # What: Connect / read timeout for Redis sockets, same bound as mongo_timeout_ms
    redis_timeout_ms: int = Field(default=5000, ge=100, le=120_000)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # Format: Comma-separated origins, "*" allows any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Error Disclosure ──────────────────────────────────────────────────
    # What: When True, 500 responses carry the raw driver error text.
    # When False, clients get a generic message and the raw text is only logged.
    expose_backend_errors: bool = Field(default=False)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGO_URL and mongo_url both work
    }


settings = Settings()
