from __future__ import annotations

from pathlib import Path

import pytest

from hybrid_search.config import SearchConfig, resolve_db_path

_ENV_VARS = (
    "HYBRID_SEARCH_DB_PATH",
    "HYBRID_SEARCH_DEFAULT_WEIGHT",
    "HYBRID_SEARCH_PER_PAGE",
    "HYBRID_SEARCH_MAX_WORKERS",
    "HYBRID_SEARCH_EMBEDDING_TIMEOUT",
    "HYBRID_SEARCH_EMBEDDING_DIM",
    "HYBRID_SEARCH_LOG_LEVEL",
    "HYBRID_SEARCH_LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_resolve_db_path_precedence(tmp_path: Path, monkeypatch) -> None:
    env_path = tmp_path / "env.duckdb"
    override = tmp_path / "override.duckdb"

    assert resolve_db_path().endswith("index.duckdb")

    monkeypatch.setenv("HYBRID_SEARCH_DB_PATH", str(env_path))
    assert resolve_db_path() == str(env_path.resolve())
    assert resolve_db_path(str(override)) == str(override.resolve())


def test_defaults() -> None:
    config = SearchConfig.from_env(db_path="/tmp/x.duckdb")

    assert config.default_weight == 0.5
    assert config.per_page == 10
    assert config.max_workers == 4
    assert config.embedding_timeout is None
    assert config.embedding_dim is None
    assert config.log_level == "INFO"
    assert config.log_format == "console"


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("HYBRID_SEARCH_DEFAULT_WEIGHT", "0.8")
    monkeypatch.setenv("HYBRID_SEARCH_PER_PAGE", "25")
    monkeypatch.setenv("HYBRID_SEARCH_MAX_WORKERS", "8")
    monkeypatch.setenv("HYBRID_SEARCH_EMBEDDING_TIMEOUT", "2.5")
    monkeypatch.setenv("HYBRID_SEARCH_EMBEDDING_DIM", "1536")
    monkeypatch.setenv("HYBRID_SEARCH_LOG_LEVEL", "debug")
    monkeypatch.setenv("HYBRID_SEARCH_LOG_FORMAT", "JSON")

    config = SearchConfig.from_env()

    assert config.default_weight == 0.8
    assert config.per_page == 25
    assert config.max_workers == 8
    assert config.embedding_timeout == 2.5
    assert config.embedding_dim == 1536
    assert config.log_level == "DEBUG"
    assert config.log_format == "json"


@pytest.mark.parametrize(
    "name,value",
    [
        ("HYBRID_SEARCH_PER_PAGE", "ten"),
        ("HYBRID_SEARCH_DEFAULT_WEIGHT", "half"),
        ("HYBRID_SEARCH_LOG_FORMAT", "xml"),
    ],
)
def test_malformed_values_name_the_variable(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        SearchConfig.from_env()
