from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from leaguemerge.app import create_season, import_extractions, preview_extractions
from leaguemerge.config import MergeConfig
from leaguemerge.domain.extraction import ImportFilePreview
from tests.helpers.extractions import league_week, make_extraction, make_preview

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from leaguemerge.adapters.memory import InMemoryUnitOfWork, LeagueStore
    from leaguemerge.adapters.sqlalchemy.unit_of_work import SqlAlchemyLeagueUnitOfWork
    from leaguemerge.domain.model import Season


class FakeSource:
    def __init__(self, previews: list[ImportFilePreview]) -> None:
        self.previews = previews
        self.requested: list[Path] = []

    def __call__(self, paths: Iterable[Path]) -> list[ImportFilePreview]:
        self.requested.extend(paths)
        return self.previews


def test_import_extractions_commits_loaded_files(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    league_store: LeagueStore,
    season: Season,
) -> None:
    source = FakeSource([make_preview(league_week())])

    result = import_extractions(
        [Path("week1.json")],
        season_id=season.id,
        source=source,
        unit_of_work_factory=memory_unit_of_work,
        merge_config=MergeConfig(),
    )

    assert result.success
    assert source.requested == [Path("week1.json")]
    assert len(league_store.fixtures) == 2


def test_import_extractions_uses_merge_config(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    season: Season,
) -> None:
    extraction = make_extraction(players=[("John Smith", "Red Lion"), ("Jon Smith", "Crown")])

    strict = import_extractions(
        [],
        season_id=season.id,
        source=FakeSource([make_preview(extraction)]),
        unit_of_work_factory=memory_unit_of_work,
        merge_config=MergeConfig(auto_merge_threshold=100),
    )

    assert strict.auto_merged_players == 0
    assert len(strict.merge_suggestions) == 1


def test_import_extractions_reads_json_files(
    tmp_path: Path,
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    league_store: LeagueStore,
    season: Season,
) -> None:
    path = tmp_path / "week1.json"
    path.write_text(
        json.dumps(
            {
                "division": "Premier",
                "results": [{"date": "05/01/2024", "home_team": "Red Lion", "away_team": "Crown"}],
            }
        )
    )

    result = import_extractions(
        [path], season_id=season.id, unit_of_work_factory=memory_unit_of_work
    )

    assert result.success
    assert result.files_succeeded == 1
    assert [team.name for team in league_store.teams] == ["RED LION", "CROWN"]


def test_preview_extractions_does_not_commit(league_store: LeagueStore) -> None:
    batch = preview_extractions([], source=FakeSource([make_preview(league_week())]))

    assert len(batch.graph.players) == 3
    assert league_store.players == []


def test_create_season_persists_through_sqlalchemy(
    sqlite_unit_of_work: Callable[[], SqlAlchemyLeagueUnitOfWork],
) -> None:
    season = create_season(
        name=" Winter 2024 ",
        start_date=date(2024, 1, 5),
        unit_of_work_factory=sqlite_unit_of_work,
    )

    assert season.name == "Winter 2024"
    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.seasons.get(season.id)
        assert stored is not None
        assert stored.start_date == date(2024, 1, 5)


def test_create_season_rejects_inverted_dates(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
) -> None:
    with pytest.raises(ValueError, match="start"):
        create_season(
            name="Backwards",
            start_date=date(2024, 3, 1),
            end_date=date(2024, 1, 1),
            unit_of_work_factory=memory_unit_of_work,
        )
