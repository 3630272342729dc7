from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest
from sqlalchemy import create_engine

from leaguemerge.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyLeagueUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from leaguemerge.domain.aggregation import PreviewGraph
from leaguemerge.domain.commit import CommitEngine
from leaguemerge.domain.model import Division, Season

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_sqlalchemy_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyLeagueUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_startup_uses_configured_database_uri() -> None:
    startup(database_uri="sqlite+pysqlite:///:memory:")

    engine = configured_engine()
    assert engine is not None
    assert engine.url.database == ":memory:"


def test_unit_of_work_persists_seasons(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    season = Season(name="Winter 2024", start_date=date(2024, 1, 5))

    with SqlAlchemyLeagueUnitOfWork() as uow:
        uow.repositories.seasons.add(season)
        uow.commit()

    with SqlAlchemyLeagueUnitOfWork() as uow:
        stored = uow.repositories.seasons.get(season.id)
        assert stored is not None
        assert stored.name == "Winter 2024"
        assert stored.start_date == date(2024, 1, 5)
        assert stored.is_active


def test_unit_of_work_discards_uncommitted_changes(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    season = Season(name="Winter 2024")

    with SqlAlchemyLeagueUnitOfWork() as uow:
        uow.repositories.seasons.add(season)
        uow.commit()

    with SqlAlchemyLeagueUnitOfWork() as uow:
        uow.repositories.divisions.add(Division(name="Premier", season_id=season.id))

    with SqlAlchemyLeagueUnitOfWork() as uow:
        assert uow.repositories.divisions.list_for_season(season.id) == []


def test_unit_of_work_rolls_back_on_exception(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    season = Season(name="Winter 2024")

    with pytest.raises(RuntimeError), SqlAlchemyLeagueUnitOfWork() as uow:
        uow.repositories.seasons.add(season)
        raise RuntimeError("boom")

    with SqlAlchemyLeagueUnitOfWork() as uow:
        assert uow.repositories.seasons.list_all() == []


def test_commit_without_startup_reports_setup_error() -> None:
    result = CommitEngine(SqlAlchemyLeagueUnitOfWork).commit(PreviewGraph(), uuid4())

    assert result.success is False
    [error] = result.errors
    assert error.startswith("setup: SQLAlchemy adapter not initialised")
