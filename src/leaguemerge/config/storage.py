"""Where the league store lives: a ``DATABASE_URI`` override or a local SQLite file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "leaguemerge"
DEFAULT_DB_FILENAME: Final[str] = "leaguemerge.db"
DATA_DIR_ENV_VAR: Final[str] = "LEAGUEMERGE_DATA_DIR"
DATABASE_URI_ENV_VAR: Final[str] = "DATABASE_URI"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str

    @classmethod
    def sqlite_file(cls, path: Path) -> DatabaseConfig:
        return cls(uri=f"sqlite+pysqlite:///{path}")


def resolve_data_dir() -> Path:
    """``LEAGUEMERGE_DATA_DIR`` if set, else the per-user application data directory."""

    env_dir = os.getenv(DATA_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir).expanduser().resolve()
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_database_config(*, data_dir: Path | None = None) -> DatabaseConfig:
    env_uri = os.getenv(DATABASE_URI_ENV_VAR)
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    directory = data_dir or resolve_data_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return DatabaseConfig.sqlite_file(directory / DEFAULT_DB_FILENAME)
