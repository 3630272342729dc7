"""Application configuration helpers."""

from __future__ import annotations

from .env import env_int
from .errors import ConfigurationError
from .logging import configure_logging
from .merge import MergeConfig, get_merge_config
from .storage import DatabaseConfig, get_database_config, resolve_data_dir

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MergeConfig",
    "configure_logging",
    "env_int",
    "get_database_config",
    "get_merge_config",
    "resolve_data_dir",
]
