"""
NoteTime Backend — Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a default `settings` object.
Who:   Imported by the application factory, Alembic and the CLI entry points.
When:  Loaded once at module import time; `create_app()` also accepts an
       explicit Settings instance so tests can point at a scratch database.

Environment:
    DB_PATH        SQLite database file (default ./notetime.db)
    DATABASE_URL   Full async SQLAlchemy URL, overrides DB_PATH when set
    HOST / PORT    Bind address for `python -m notetime` (default 0.0.0.0:8080)
    STATIC_DIR     Frontend bundle served for non-API paths
    CORS_ORIGINS   Comma-separated allowed origins (default "*")
    LOG_LEVEL      DEBUG, INFO, WARNING, ERROR or CRITICAL
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running next to a local
    frontend build; a container deployment usually overrides DB_PATH only.
    """

    # ── Database ──────────────────────────────────────────────────────────
    db_path: str = Field(
        default="./notetime.db",
        description="Path of the SQLite database file",
    )

    # Takes precedence over db_path when set
    database_url: Optional[str] = Field(
        default=None,
        description="Async SQLAlchemy connection URL",
    )

    @property
    def sqlalchemy_url(self) -> str:
        """Async connection URL for the configured store."""
        if self.database_url:
            return self.database_url
        return f"sqlite+aiosqlite:///{self.db_path}"

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)

    # ── Frontend ──────────────────────────────────────────────────────────
    static_dir: str = Field(
        default="./frontend/build",
        description="Directory holding the compiled frontend bundle",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Logging ───────────────────────────────────────────────────────────
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

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_PATH and db_path both work
        "extra": "ignore",
    }


settings = Settings()
