"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityType(StrEnum):
    """Typed-reference discriminator for league entities."""

    SEASON = "season"
    DIVISION = "division"
    TEAM = "team"
    PLAYER = "player"
    FIXTURE = "fixture"
    FRAME_RESULT = "frame_result"


class FrameWinner(StrEnum):
    NONE = "none"
    HOME = "home"
    AWAY = "away"


class FileImportStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class MergeReason(StrEnum):
    """Human-readable explanation attached to a possible-duplicate player pair."""

    SAME_LAST_NAME = "Same last name, similar first name"
    SAME_FIRST_NAME = "Same first name, similar last name"
    TRANSPOSED = "Names transposed"
    INITIAL = "Initial matches full first name"
    SIMILAR_SPELLING = "Similar spelling"
