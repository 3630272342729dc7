"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import ExtractionSource
from .persistence import (
    DivisionRepository,
    FixtureRepository,
    PlayerRepository,
    Repository,
    SeasonRepository,
    SeasonScopedRepository,
    TeamRepository,
)
from .unit_of_work import (
    LeagueRepositories,
    LeagueUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "DivisionRepository",
    "ExtractionSource",
    "FixtureRepository",
    "LeagueRepositories",
    "LeagueUnitOfWork",
    "PlayerRepository",
    "Repository",
    "RepositoryCollection",
    "SeasonRepository",
    "SeasonScopedRepository",
    "TeamRepository",
    "UnitOfWork",
]
