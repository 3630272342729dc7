"""Commit a preview graph into the league store."""

from __future__ import annotations

from .context import CommitContext, CommitResult, EntityCounts, SeasonNotFoundError
from .engine import CommitEngine, CommitProgress, default_phases
from .phases import (
    CommitPhase,
    DivisionPhase,
    FixturePhase,
    FramePhase,
    PlayerPhase,
    TeamPhase,
)
from .season_span import SeasonSpanPhase, fixture_span, reconcile_season_span

__all__ = [
    "CommitContext",
    "CommitEngine",
    "CommitPhase",
    "CommitProgress",
    "CommitResult",
    "DivisionPhase",
    "EntityCounts",
    "FixturePhase",
    "FramePhase",
    "PlayerPhase",
    "SeasonNotFoundError",
    "SeasonSpanPhase",
    "TeamPhase",
    "default_phases",
    "fixture_span",
    "reconcile_season_span",
]
