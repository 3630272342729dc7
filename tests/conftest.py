from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from leaguemerge.adapters.memory import InMemoryUnitOfWork, LeagueStore, unit_of_work_factory
from leaguemerge.adapters.sqlalchemy import create_all_tables, start_mappers
from leaguemerge.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyLeagueUnitOfWork,
    shutdown,
    startup,
)
from leaguemerge.domain.model import Season

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def season() -> Season:
    return Season(name="Winter 2024")


@pytest.fixture
def league_store(season: Season) -> LeagueStore:
    return LeagueStore(seasons=[season])


@pytest.fixture
def memory_unit_of_work(league_store: LeagueStore) -> Callable[[], InMemoryUnitOfWork]:
    return unit_of_work_factory(league_store)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyLeagueUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyLeagueUnitOfWork:
        return SqlAlchemyLeagueUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
