"""SQLAlchemy adapter package for leaguemerge."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyDivisionRepository,
    SqlAlchemyFixtureRepository,
    SqlAlchemyPlayerRepository,
    SqlAlchemySeasonRepository,
    SqlAlchemyTeamRepository,
)
from .unit_of_work import (
    SqlAlchemyLeagueUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyDivisionRepository",
    "SqlAlchemyFixtureRepository",
    "SqlAlchemyLeagueUnitOfWork",
    "SqlAlchemyPlayerRepository",
    "SqlAlchemySeasonRepository",
    "SqlAlchemyTeamRepository",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
