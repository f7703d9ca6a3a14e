"""Where the reference catalog is stored."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_bool_env

APP_DIR_NAME: Final[str] = "productrecon"
CATALOG_DB_FILENAME: Final[str] = "catalog.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    echo: bool = False


def catalog_data_dir() -> Path:
    """Directory holding the default sqlite catalog.

    ``PRODUCTRECON_DATA_DIR`` wins; otherwise the platform's per-user data
    directory (``XDG_DATA_HOME`` or ``LOCALAPPDATA``) is used.
    """

    override = os.getenv("PRODUCTRECON_DATA_DIR")
    if override:
        return Path(override).expanduser().resolve()
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Local"
    else:
        base = os.getenv("XDG_DATA_HOME")
        root = Path(base) if base else Path.home() / ".local" / "share"
    return (root / APP_DIR_NAME).expanduser().resolve()


def default_database_uri(data_dir: Path | None = None) -> str:
    directory = data_dir if data_dir is not None else catalog_data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return f"sqlite+pysqlite:///{directory / CATALOG_DB_FILENAME}"


def get_database_config() -> DatabaseConfig:
    uri = os.getenv("DATABASE_URI") or default_database_uri()
    return DatabaseConfig(uri=uri, echo=optional_bool_env("DATABASE_ECHO"))
