from __future__ import annotations

from datetime import date
from uuid import uuid4

from leaguemerge.domain.commit import fixture_span, reconcile_season_span
from leaguemerge.domain.model import Fixture, Season


def _fixture(played_on: date) -> Fixture:
    return Fixture(date=played_on, home_team_id=uuid4(), away_team_id=uuid4())


def test_fixture_span_is_none_without_fixtures() -> None:
    assert fixture_span([]) is None


def test_fixture_span_uses_earliest_and_latest_date() -> None:
    fixtures = [_fixture(date(2024, 3, 1)), _fixture(date(2024, 1, 5)), _fixture(date(2024, 3, 1))]

    assert fixture_span(fixtures) == (date(2024, 1, 5), date(2024, 3, 1))


def test_reconcile_updates_season_dates() -> None:
    season = Season(name="Winter")

    changed = reconcile_season_span(season, [_fixture(date(2024, 1, 5))])

    assert changed
    assert season.start_date == season.end_date == date(2024, 1, 5)


def test_reconcile_reports_unchanged_span() -> None:
    season = Season(name="Winter", start_date=date(2024, 1, 5), end_date=date(2024, 1, 5))

    assert reconcile_season_span(season, [_fixture(date(2024, 1, 5))]) is False


def test_reconcile_leaves_season_without_fixtures_alone() -> None:
    season = Season(name="Winter", start_date=date(2023, 9, 1), end_date=date(2024, 4, 30))

    assert reconcile_season_span(season, []) is False
    assert season.start_date == date(2023, 9, 1)


def test_season_str_falls_back_to_dates() -> None:
    season = Season(name=" ", start_date=date(2024, 1, 5), end_date=date(2024, 3, 1))

    assert str(season) == "2024-01-05 - 2024-03-01"
    assert str(Season(name="Winter")) == "Winter"
