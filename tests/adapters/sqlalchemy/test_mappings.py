from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import func, inspect, select

from leaguemerge.adapters.sqlalchemy import create_all_tables, start_mappers
from leaguemerge.adapters.sqlalchemy.mappings import frame_result_table
from leaguemerge.domain.model import Fixture, FrameWinner, Player, Season, Team

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session


def test_start_mappers_is_idempotent() -> None:
    # First invocation happens in the sqlite_engine fixture; calling again should be harmless.
    start_mappers()
    start_mappers()


def test_create_all_tables_registers_league_tables(sqlite_engine: Engine) -> None:
    create_all_tables(sqlite_engine)
    inspector = inspect(sqlite_engine)
    table_names = set(inspector.get_table_names())
    for required in ("season", "division", "team", "player", "fixture", "frame_result"):
        assert required in table_names
    indexes = {index["name"] for index in inspector.get_indexes("fixture")}
    assert "ix_fixture_season_date" in indexes


def test_deleting_fixture_removes_its_frames(sqlite_session: Session) -> None:
    season = Season(name="Winter")
    home = Team(name="RED LION", season_id=season.id)
    away = Team(name="CROWN", season_id=season.id)
    john = Player(first_name="JOHN", last_name="SMITH", season_id=season.id)
    bob = Player(first_name="BOB", last_name="JONES", season_id=season.id)
    fixture = Fixture(
        date=date(2024, 1, 5), home_team_id=home.id, away_team_id=away.id, season_id=season.id
    )
    fixture.add_frame(home_player_id=john.id, away_player_id=bob.id, winner=FrameWinner.HOME)
    sqlite_session.add_all([season, home, away, john, bob, fixture])
    sqlite_session.commit()

    sqlite_session.delete(fixture)
    sqlite_session.commit()

    count = sqlite_session.execute(select(func.count()).select_from(frame_result_table))
    assert count.scalar_one() == 0
