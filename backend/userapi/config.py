"""
User API — Application Configuration
=====================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
When:  Loaded once at module import time; never reloaded.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for a local MongoDB instance.
    Attributes are grouped by concern for readability.
    """

    # ── Document Store ────────────────────────────────────────────────────
    # Format: mongodb://[user:password@]host[:port][/?options]
    mongodb_url: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection URI",
    )
    mongodb_database: str = Field(default="userapi")
    mongodb_collection: str = Field(default="users")

    # What: How long the driver waits to find a usable server before an
    # operation fails. This is the only bound on a request's store call.
    mongodb_timeout_ms: int = Field(default=5000, ge=100, le=60_000)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="127.0.0.1")
    backend_port: int = Field(default=8080, ge=1, le=65535)

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

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # MONGODB_URL and mongodb_url both work
    }


# Singleton instance — imported throughout the application
settings = Settings()
