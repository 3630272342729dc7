"""Ports for persisting league entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from leaguemerge.domain.model import Division, Fixture, Player, Season, SeasonScopedEntity, Team

if TYPE_CHECKING:
    from uuid import UUID


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class SeasonScopedRepository[TEntity: SeasonScopedEntity](Repository[TEntity], Protocol):
    """Repository whose entities are always looked up within one season."""

    def list_for_season(self, season_id: UUID) -> list[TEntity]: ...


@runtime_checkable
class SeasonRepository(Repository[Season], Protocol):
    """Repository contract for seasons."""

    def get(self, season_id: UUID) -> Season | None: ...

    def list_all(self) -> list[Season]: ...


@runtime_checkable
class DivisionRepository(SeasonScopedRepository[Division], Protocol):
    """Repository contract for divisions."""


@runtime_checkable
class TeamRepository(SeasonScopedRepository[Team], Protocol):
    """Repository contract for teams."""


@runtime_checkable
class PlayerRepository(SeasonScopedRepository[Player], Protocol):
    """Repository contract for players."""


@runtime_checkable
class FixtureRepository(SeasonScopedRepository[Fixture], Protocol):
    """Repository contract for fixtures; frames are saved with their fixture."""
