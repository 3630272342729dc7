"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from leaguemerge.domain.ports.persistence import (
        DivisionRepository,
        FixtureRepository,
        PlayerRepository,
        SeasonRepository,
        TeamRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection.

    Leaving the context without calling ``commit`` discards every change made
    through the repositories.
    """

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class LeagueRepositories(RepositoryCollection):
    """Repositories required to commit a batch into one season."""

    seasons: SeasonRepository
    divisions: DivisionRepository
    teams: TeamRepository
    players: PlayerRepository
    fixtures: FixtureRepository


type LeagueUnitOfWork = UnitOfWork[LeagueRepositories]
