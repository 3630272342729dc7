"""Merge and aggregation defaults for batch imports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import env_int
from .errors import ConfigurationError

DEFAULT_AUTO_MERGE_THRESHOLD: Final[int] = 90
DEFAULT_SAME_NAME_MAX_DISTANCE: Final[int] = 2
DEFAULT_BOTH_NAMES_MAX_DISTANCE: Final[int] = 1
DEFAULT_YIELD_BATCH_SIZE: Final[int] = 10
AUTO_MERGE_THRESHOLD_ENV_VAR: Final[str] = "LEAGUEMERGE_AUTO_MERGE_THRESHOLD"


@dataclass(frozen=True, slots=True)
class MergeConfig:
    auto_merge_threshold: int = DEFAULT_AUTO_MERGE_THRESHOLD
    same_name_max_distance: int = DEFAULT_SAME_NAME_MAX_DISTANCE
    both_names_max_distance: int = DEFAULT_BOTH_NAMES_MAX_DISTANCE
    yield_batch_size: int = DEFAULT_YIELD_BATCH_SIZE

    def __post_init__(self) -> None:
        if not 0 <= self.auto_merge_threshold <= 100:
            raise ConfigurationError(
                f"Auto-merge threshold must be between 0 and 100, got {self.auto_merge_threshold}"
            )
        if self.same_name_max_distance < 0 or self.both_names_max_distance < 0:
            raise ConfigurationError("Edit distance limits must be non-negative")
        if self.yield_batch_size < 1:
            raise ConfigurationError("Yield batch size must be positive")


def get_merge_config() -> MergeConfig:
    return MergeConfig(
        auto_merge_threshold=env_int(AUTO_MERGE_THRESHOLD_ENV_VAR, DEFAULT_AUTO_MERGE_THRESHOLD)
    )
