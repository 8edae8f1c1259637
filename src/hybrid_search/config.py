"""
Environment-driven configuration for the search engine and its adapters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_DB_PATH = "~/.hybrid_search/index.duckdb"
ENV_DB_PATH = "HYBRID_SEARCH_DB_PATH"


def resolve_db_path(override_path: str | None = None) -> str:
    """
    Resolve the DuckDB path from CLI override, env var, or default.

    Precedence:
    1) explicit override_path
    2) HYBRID_SEARCH_DB_PATH
    3) default path
    """
    raw_path = override_path or os.getenv(ENV_DB_PATH) or DEFAULT_DB_PATH
    return str(Path(raw_path).expanduser().resolve())


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class SearchConfig:
    """Runtime settings shared by the CLI and the HTTP server."""

    db_path: str
    default_weight: float = 0.5
    per_page: int = 10
    max_workers: int = 4
    embedding_timeout: float | None = None
    embedding_dim: int | None = None
    log_level: str = "INFO"
    log_format: str = "console"

    @classmethod
    def from_env(cls, *, db_path: str | None = None) -> SearchConfig:
        log_format = os.getenv("HYBRID_SEARCH_LOG_FORMAT", "console").lower()
        if log_format not in {"console", "json"}:
            raise ValueError(
                f"HYBRID_SEARCH_LOG_FORMAT must be 'console' or 'json', got {log_format!r}"
            )
        return cls(
            db_path=resolve_db_path(db_path),
            default_weight=_env_float("HYBRID_SEARCH_DEFAULT_WEIGHT", 0.5),
            per_page=_env_int("HYBRID_SEARCH_PER_PAGE", 10),
            max_workers=_env_int("HYBRID_SEARCH_MAX_WORKERS", 4),
            embedding_timeout=_env_float("HYBRID_SEARCH_EMBEDDING_TIMEOUT", None),
            embedding_dim=_env_int("HYBRID_SEARCH_EMBEDDING_DIM", None),
            log_level=os.getenv("HYBRID_SEARCH_LOG_LEVEL", "INFO").upper(),
            log_format=log_format,
        )
