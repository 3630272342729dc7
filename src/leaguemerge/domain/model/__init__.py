"""Public domain model surface."""

from __future__ import annotations

from leaguemerge.domain.model.entity import Entity, EntityRef, SeasonScopedEntity, new_id
from leaguemerge.domain.model.enums import EntityType, FileImportStatus, FrameWinner, MergeReason
from leaguemerge.domain.model.league import (
    Division,
    Fixture,
    FrameResult,
    Player,
    Season,
    Team,
)

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "EntityRef",
    "SeasonScopedEntity",
    "new_id",
    # league
    "Season",
    "Division",
    "Team",
    "Player",
    "Fixture",
    "FrameResult",
    # enums
    "EntityType",
    "FileImportStatus",
    "FrameWinner",
    "MergeReason",
]
