from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from uuid import uuid4

from leaguemerge.domain.model import Division, Fixture, FrameWinner, Team

if TYPE_CHECKING:
    from collections.abc import Callable

    from leaguemerge.adapters.memory import InMemoryUnitOfWork, LeagueStore
    from leaguemerge.domain.model import Season


def test_additions_are_visible_inside_the_unit_of_work(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    league_store: LeagueStore,
    season: Season,
) -> None:
    division = Division(name="Premier", season_id=season.id)

    with memory_unit_of_work() as uow:
        uow.repositories.divisions.add(division)
        assert uow.repositories.divisions.list_for_season(season.id) == [division]
        assert league_store.divisions == []


def test_leaving_without_commit_discards_additions(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    league_store: LeagueStore,
    season: Season,
) -> None:
    with memory_unit_of_work() as uow:
        uow.repositories.teams.add(Team(name="RED LION", season_id=season.id))

    assert league_store.teams == []


def test_commit_applies_additions(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    league_store: LeagueStore,
    season: Season,
) -> None:
    team = Team(name="RED LION", season_id=season.id)

    with memory_unit_of_work() as uow:
        uow.repositories.teams.add(team)
        uow.commit()

    assert league_store.teams == [team]
    with memory_unit_of_work() as uow:
        assert uow.repositories.teams.list_for_season(season.id) == [team]
        assert uow.repositories.teams.list_for_season(uuid4()) == []


def test_rollback_restores_frames_and_season_dates(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    league_store: LeagueStore,
    season: Season,
) -> None:
    fixture = Fixture(
        date=date(2024, 1, 5), home_team_id=uuid4(), away_team_id=uuid4(), season_id=season.id
    )
    league_store.fixtures.append(fixture)

    with memory_unit_of_work() as uow:
        fixture.add_frame(
            home_player_id=uuid4(), away_player_id=uuid4(), winner=FrameWinner.HOME
        )
        season.update_span(date(2024, 1, 5), date(2024, 1, 5))
        uow.rollback()

    assert fixture.frames == []
    assert season.start_date is None


def test_season_repository_lookup(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    season: Season,
) -> None:
    with memory_unit_of_work() as uow:
        assert uow.repositories.seasons.get(season.id) is season
        assert uow.repositories.seasons.get(uuid4()) is None
        assert uow.repositories.seasons.list_all() == [season]
