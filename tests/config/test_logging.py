from __future__ import annotations

import logging

import pytest

from productrecon.config import configure_logging
from productrecon.config.logging import LOG_FORMAT


@pytest.mark.usefixtures("restore_loggers")
def test_configure_logging_sets_level_and_format() -> None:
    configure_logging(level="DEBUG", force=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    formatter = root.handlers[0].formatter
    assert formatter is not None
    assert formatter._fmt == LOG_FORMAT
    assert logging.getLogger("httpx").level == logging.WARNING


@pytest.mark.usefixtures("restore_loggers")
def test_library_loggers_can_stay_verbose() -> None:
    logging.getLogger("sqlalchemy.engine").setLevel(logging.NOTSET)

    configure_logging(force=True, quiet_libraries=False)

    assert logging.getLogger("sqlalchemy.engine").level == logging.NOTSET
