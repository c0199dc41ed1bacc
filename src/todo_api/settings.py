from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'memory' (default) or 'sqlite'
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/todos.db'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - API_BASE_PATH: prefix mounted in front of every route (default: none)
    - LOG_LEVEL: logging level name for the 'todo_api' logger (default: INFO)
    - DEFAULT_PAGE_SIZE: page size used when a list request omits pageSize (default: 10)
    """

    persistence_backend: str = "memory"
    sqlite_db_path: str = "./data/todos.db"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    api_base_path: str = ""
    log_level: str = "INFO"
    default_page_size: int = 10


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def normalize_base_path(value: str) -> str:
    """Return the base path as '/prefix' without a trailing slash, or '' for the root."""
    stripped = value.strip().strip("/")
    return f"/{stripped}" if stripped else ""


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "memory").strip().lower()
    if backend not in {"memory", "sqlite"}:
        backend = "memory"

    return Settings(
        persistence_backend=backend,
        sqlite_db_path=_get_env("SQLITE_DB_PATH", "./data/todos.db").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        api_base_path=normalize_base_path(_get_env("API_BASE_PATH", "")),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        default_page_size=_parse_int(_get_env("DEFAULT_PAGE_SIZE", "10"), 10),
    )
