"""In-memory league store with a staging unit of work.

Additions made through the repositories are staged until ``commit``. Fixture
frame lists and season dates are mutated in place by the commit phases, so the
unit of work snapshots them on entry and restores them on ``rollback``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING, Any, Self

from leaguemerge.domain.model import (
    Division,
    Fixture,
    FrameResult,
    Player,
    Season,
    SeasonScopedEntity,
    Team,
)
from leaguemerge.domain.ports.unit_of_work import LeagueRepositories

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import date
    from types import TracebackType
    from uuid import UUID

log = getLogger(__name__)


@dataclass(slots=True)
class LeagueStore:
    """Committed league entities, the in-memory stand-in for a database."""

    seasons: list[Season] = field(default_factory=list[Season])
    divisions: list[Division] = field(default_factory=list[Division])
    teams: list[Team] = field(default_factory=list[Team])
    players: list[Player] = field(default_factory=list[Player])
    fixtures: list[Fixture] = field(default_factory=list[Fixture])

    def season(self, season_id: UUID) -> Season | None:
        return next((season for season in self.seasons if season.id == season_id), None)


class _StagedRepository[TEntity]:
    def __init__(self, committed: list[TEntity]) -> None:
        self._committed = committed
        self.staged: list[TEntity] = []

    def add(self, entity: TEntity) -> None:
        self.staged.append(entity)

    def _all(self) -> list[TEntity]:
        return [*self._committed, *self.staged]

    def apply(self) -> None:
        self._committed.extend(self.staged)
        self.staged.clear()

    def discard(self) -> None:
        self.staged.clear()


class _SeasonScopedRepository[TEntity: SeasonScopedEntity](_StagedRepository[TEntity]):
    def list_for_season(self, season_id: UUID) -> list[TEntity]:
        return [entity for entity in self._all() if entity.belongs_to(season_id)]


class InMemorySeasonRepository(_StagedRepository[Season]):
    def get(self, season_id: UUID) -> Season | None:
        return next((season for season in self._all() if season.id == season_id), None)

    def list_all(self) -> list[Season]:
        return self._all()


class InMemoryDivisionRepository(_SeasonScopedRepository[Division]):
    pass


class InMemoryTeamRepository(_SeasonScopedRepository[Team]):
    pass


class InMemoryPlayerRepository(_SeasonScopedRepository[Player]):
    pass


class InMemoryFixtureRepository(_SeasonScopedRepository[Fixture]):
    pass


class InMemoryUnitOfWork:
    """Unit of work over a ``LeagueStore``; leaving without ``commit`` rolls back."""

    def __init__(self, store: LeagueStore) -> None:
        self.store = store
        self._seasons = InMemorySeasonRepository(store.seasons)
        self._divisions = InMemoryDivisionRepository(store.divisions)
        self._teams = InMemoryTeamRepository(store.teams)
        self._players = InMemoryPlayerRepository(store.players)
        self._fixtures = InMemoryFixtureRepository(store.fixtures)
        self._repositories = LeagueRepositories(
            seasons=self._seasons,
            divisions=self._divisions,
            teams=self._teams,
            players=self._players,
            fixtures=self._fixtures,
        )
        self._frame_snapshots: list[tuple[Fixture, list[FrameResult]]] = []
        self._season_snapshots: list[tuple[Season, date | None, date | None]] = []
        self.committed = False

    @property
    def repositories(self) -> LeagueRepositories:
        return self._repositories

    def __enter__(self) -> Self:
        self._snapshot()
        self.committed = False
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool:
        if not self.committed:
            self.rollback()
        return False

    def commit(self) -> None:
        staged = self._staged_repositories()
        log.debug("Applying %d staged entities", sum(len(repo.staged) for repo in staged))
        for repository in staged:
            repository.apply()
        self.committed = True
        self._snapshot()

    def rollback(self) -> None:
        for repository in self._staged_repositories():
            repository.discard()
        for fixture, frames in self._frame_snapshots:
            fixture.frames[:] = frames
        for season, start, end in self._season_snapshots:
            season.start_date = start
            season.end_date = end

    def _staged_repositories(self) -> tuple[_StagedRepository[Any], ...]:
        return (
            self._seasons,
            self._divisions,
            self._teams,
            self._players,
            self._fixtures,
        )

    def _snapshot(self) -> None:
        self._frame_snapshots = [(fixture, list(fixture.frames)) for fixture in self.store.fixtures]
        self._season_snapshots = [
            (season, season.start_date, season.end_date) for season in self.store.seasons
        ]


def unit_of_work_factory(store: LeagueStore) -> Callable[[], InMemoryUnitOfWork]:
    """Return a factory producing fresh units of work bound to ``store``."""

    return partial(InMemoryUnitOfWork, store)
