"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from leaguemerge.adapters.sqlalchemy.mappings import SEASON_SCOPED_TABLES, season_table
from leaguemerge.domain.model import Division, Fixture, Player, Season, SeasonScopedEntity, Team

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.orm import Session


class SqlAlchemySeasonRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Season) -> None:
        self.session.add(entity)

    def get(self, season_id: uuid.UUID) -> Season | None:
        return self.session.get(Season, season_id)

    def list_all(self) -> list[Season]:
        stmt = select(Season).order_by(season_table.c.start_date, season_table.c.name)
        return list(self.session.execute(stmt).scalars())


class SqlAlchemySeasonScopedRepository[TEntity: SeasonScopedEntity]:
    """Shared ``add`` / ``list_for_season`` for entities owned by a season."""

    def __init__(self, session: Session, entity_cls: type[TEntity]) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = SEASON_SCOPED_TABLES[entity_cls]

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def list_for_season(self, season_id: uuid.UUID) -> list[TEntity]:
        stmt = select(self._entity_cls).where(self._table.c.season_id == season_id)
        return list(self.session.execute(stmt).scalars())


class SqlAlchemyDivisionRepository(SqlAlchemySeasonScopedRepository[Division]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Division)


class SqlAlchemyTeamRepository(SqlAlchemySeasonScopedRepository[Team]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Team)


class SqlAlchemyPlayerRepository(SqlAlchemySeasonScopedRepository[Player]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Player)


class SqlAlchemyFixtureRepository(SqlAlchemySeasonScopedRepository[Fixture]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Fixture)
