from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from productrecon.config import (
    InvalidConfigurationError,
    catalog_data_dir,
    default_database_uri,
    get_database_config,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_database_uri_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql://catalog")
    monkeypatch.delenv("DATABASE_ECHO", raising=False)

    config = get_database_config()

    assert config.uri == "postgresql://catalog"
    assert config.echo is False


def test_database_uri_defaults_to_sqlite_in_data_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.delenv("DATABASE_URI", raising=False)
    monkeypatch.setenv("PRODUCTRECON_DATA_DIR", str(tmp_path / "data"))

    uri = get_database_config().uri

    assert uri == f"sqlite+pysqlite:///{(tmp_path / 'data').resolve() / 'catalog.db'}"
    assert (tmp_path / "data").is_dir()


def test_xdg_data_home_is_respected(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("PRODUCTRECON_DATA_DIR", raising=False)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert catalog_data_dir() == (tmp_path / "productrecon").resolve()


def test_default_uri_for_explicit_directory(tmp_path: Path) -> None:
    uri = default_database_uri(tmp_path / "nested")

    assert uri.endswith("/nested/catalog.db")
    assert (tmp_path / "nested").is_dir()


def test_database_echo_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URI", "sqlite+pysqlite:///:memory:")
    monkeypatch.setenv("DATABASE_ECHO", "yes")
    assert get_database_config().echo is True

    monkeypatch.setenv("DATABASE_ECHO", "sometimes")
    with pytest.raises(InvalidConfigurationError, match="DATABASE_ECHO"):
        get_database_config()
