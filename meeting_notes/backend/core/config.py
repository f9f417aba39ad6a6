"""
Configuration Management.

Two sources, both located from the directory holding the .project_root
marker:

    config/.env               secrets (DB_PASSWORD), read by pydantic-settings
    config/settings/*.yaml    everything else, validated by config_schema

A DATABASE_URL environment variable replaces the PostgreSQL URL built
from database.yaml. Local SQLite runs and CI use it.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from meeting_notes.backend.core.config_schema import (
    ApplicationSchema,
    DatabaseSchema,
    LoggingSchema,
)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

PROJECT_MARKER = ".project_root"


def find_project_root() -> Path:
    """Walk up from the working directory to the one holding .project_root."""
    current = Path.cwd()
    for candidate in (current, *current.parents):
        if (candidate / PROJECT_MARKER).exists():
            return candidate
    raise RuntimeError(f"Project root not found. Ensure {PROJECT_MARKER} file exists.")


def validate_project_root() -> Path:
    """
    Return the project root or exit with a readable message.

    Entry points call this before loading any configuration.
    """
    try:
        return find_project_root()
    except RuntimeError as e:
        raise SystemExit(f"Error: {e}") from e


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Read config/settings/<filename>; an empty file yields {}."""
    config_path = find_project_root() / "config" / "settings" / filename
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class Settings(BaseSettings):
    """Secrets from config/.env or the process environment."""

    db_password: SecretStr

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


def _load_validated(schema_cls: type[SchemaT], filename: str) -> SchemaT:
    raw = load_yaml_config(filename)
    try:
        return schema_cls(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration in {filename}:\n{e}") from e


class AppConfig:
    """Typed view over application.yaml, database.yaml and logging.yaml."""

    def __init__(self) -> None:
        self.application = _load_validated(ApplicationSchema, "application.yaml")
        self.database = _load_validated(DatabaseSchema, "database.yaml")
        self.logging = _load_validated(LoggingSchema, "logging.yaml")


@lru_cache
def get_settings() -> Settings:
    """Get cached secrets instance. Resolves .env path from project root."""
    env_path = find_project_root() / "config" / ".env"
    return Settings(_env_file=str(env_path))


@lru_cache
def get_app_config() -> AppConfig:
    """Get cached application configuration."""
    return AppConfig()


def get_database_url() -> str:
    """
    Async SQLAlchemy URL for the notes database.

    Returns DATABASE_URL verbatim when set. Otherwise builds a
    postgresql+asyncpg URL from database.yaml and DB_PASSWORD, escaping
    characters in the password that are special in URLs.
    """
    override = os.environ.get("DATABASE_URL")
    if override:
        return override

    db = get_app_config().database
    url = URL.create(
        "postgresql+asyncpg",
        username=db.user,
        password=get_settings().db_password.get_secret_value(),
        host=db.host,
        port=db.port,
        database=db.name,
    )
    return url.render_as_string(hide_password=False)
