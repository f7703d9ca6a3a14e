from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from productrecon.adapters.sqlalchemy import create_catalog_tables
from productrecon.config.logging import LIBRARY_LOGGERS

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:")
    create_catalog_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(autouse=True)
def _no_text_normalizer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TEXT_NORMALIZER_API_KEY", raising=False)
    monkeypatch.delenv("TEXT_NORMALIZER_CACHE_PATH", raising=False)


@pytest.fixture
def restore_loggers() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    levels = {name: logging.getLogger(name).level for name in LIBRARY_LOGGERS}
    level = root.level
    try:
        yield
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)
        for name, library_level in levels.items():
            logging.getLogger(name).setLevel(library_level)
