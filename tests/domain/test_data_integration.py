from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

from leaguemerge.domain.data_integration import BatchImportResult, import_batch
from leaguemerge.domain.extraction import ImportFilePreview
from leaguemerge.domain.model import FileImportStatus
from tests.helpers.extractions import (
    league_week,
    make_extraction,
    make_preview,
    make_result,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from leaguemerge.adapters.memory import InMemoryUnitOfWork, LeagueStore
    from leaguemerge.domain.model import Season


def _batch() -> list[ImportFilePreview]:
    return [
        make_preview(league_week()),
        make_preview(make_extraction("week2.json", results=[make_result("Anchor", "Crown")])),
        make_preview(make_extraction("ignored.json"), include=False),
        ImportFilePreview.failed("bad.json", "Error reading file: permission denied"),
    ]


def test_import_batch_aggregates_and_commits(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    league_store: LeagueStore,
    season: Season,
) -> None:
    previews = _batch()

    result = import_batch(previews, season_id=season.id, unit_of_work_factory=memory_unit_of_work)

    assert isinstance(result, BatchImportResult)
    assert result.success
    assert result.summary == "Processed: 3 | Success: 2 | Failed: 1 | Skipped: 1"
    assert result.errors == ["bad.json: Error reading file: permission denied"]
    assert result.commit is not None
    assert result.commit.fixtures.created == 3
    assert len(league_store.fixtures) == 3
    assert [preview.status for preview in previews] == [
        FileImportStatus.COMPLETED,
        FileImportStatus.COMPLETED,
        FileImportStatus.SKIPPED,
        FileImportStatus.FAILED,
    ]


def test_import_batch_reports_merges_and_suggestions(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    season: Season,
) -> None:
    extraction = make_extraction(
        players=[("John Smith", "Red Lion"), ("Jon Smith", "Red Lion"), ("J Smith", "Crown")]
    )

    result = import_batch(
        [make_preview(extraction)],
        season_id=season.id,
        unit_of_work_factory=memory_unit_of_work,
    )

    assert result.auto_merged_players == 1
    [suggestion] = result.merge_suggestions
    assert suggestion.name_2 == "J SMITH"
    assert result.commit is not None
    assert result.commit.players.created == 2


def test_import_batch_marks_files_failed_when_commit_rolls_back(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    league_store: LeagueStore,
) -> None:
    previews = [make_preview(league_week())]
    missing = uuid4()

    result = import_batch(previews, season_id=missing, unit_of_work_factory=memory_unit_of_work)

    assert result.success is False
    assert result.files_failed == 1
    assert f"setup: Season {missing} not found" in result.errors
    assert previews[0].errors == ["Error processing file: batch commit was rolled back"]
    assert league_store.teams == []


def test_import_batch_without_usable_files_skips_commit(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    season: Season,
) -> None:
    previews = [ImportFilePreview.failed("bad.json", "Invalid extraction data: nope")]

    result = import_batch(previews, season_id=season.id, unit_of_work_factory=memory_unit_of_work)

    assert result.commit is None
    assert result.success is False
    assert result.files_failed == 1


def test_detailed_summary_lists_record_counts(
    memory_unit_of_work: Callable[[], InMemoryUnitOfWork],
    season: Season,
) -> None:
    result = import_batch(
        [make_preview(league_week())],
        season_id=season.id,
        unit_of_work_factory=memory_unit_of_work,
    )

    summary = result.detailed_summary
    assert "Files: 1 processed (1 succeeded, 0 failed, 0 skipped)" in summary
    assert "  Fixtures: 2 created, 0 skipped" in summary
    assert "Players auto-merged: 0, open merge suggestions: 0" in summary
