"""Application services for importing a batch of extracted files."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta
from logging import getLogger
from typing import TYPE_CHECKING

from leaguemerge.domain.aggregation import (
    DEFAULT_AUTO_MERGE_THRESHOLD,
    PlayerMergeSuggestion,
    aggregate_files,
)
from leaguemerge.domain.aggregation.aggregator import DEFAULT_PROGRESS_INTERVAL
from leaguemerge.domain.commit import CommitEngine, CommitResult, default_phases
from leaguemerge.domain.matching import DEFAULT_THRESHOLDS
from leaguemerge.domain.model import FileImportStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from uuid import UUID

    from leaguemerge.domain.aggregation import BatchPreview
    from leaguemerge.domain.commit import CommitProgress
    from leaguemerge.domain.extraction import ImportFilePreview
    from leaguemerge.domain.matching import MatchThresholds
    from leaguemerge.domain.ports.unit_of_work import LeagueUnitOfWork

log = getLogger(__name__)


@dataclass(slots=True)
class BatchImportResult:
    """Outcome of aggregating and committing one batch of files."""

    files_processed: int = 0
    files_succeeded: int = 0
    files_failed: int = 0
    files_skipped: int = 0
    auto_merged_players: int = 0
    merge_suggestions: list[PlayerMergeSuggestion] = field(
        default_factory=list[PlayerMergeSuggestion]
    )
    commit: CommitResult | None = None
    duration: timedelta = field(default_factory=timedelta)
    errors: list[str] = field(default_factory=list[str])
    warnings: list[str] = field(default_factory=list[str])
    success: bool = False

    @property
    def summary(self) -> str:
        return (
            f"Processed: {self.files_processed} | Success: {self.files_succeeded} | "
            f"Failed: {self.files_failed} | Skipped: {self.files_skipped}"
        )

    @property
    def detailed_summary(self) -> str:
        lines = [
            f"Files: {self.files_processed} processed ({self.files_succeeded} succeeded, "
            f"{self.files_failed} failed, {self.files_skipped} skipped)",
        ]
        if self.commit is not None:
            lines.append("Records:")
            lines.extend(
                f"  {name.capitalize()}: {counts}" for name, counts in self.commit.counts().items()
            )
        lines.append(
            f"Players auto-merged: {self.auto_merged_players}, "
            f"open merge suggestions: {len(self.merge_suggestions)}"
        )
        lines.append(f"Duration: {self.duration.total_seconds():.1f}s")
        return "\n".join(lines)


def import_batch(
    previews: Iterable[ImportFilePreview],
    *,
    season_id: UUID,
    unit_of_work_factory: Callable[[], LeagueUnitOfWork],
    auto_merge_threshold: int = DEFAULT_AUTO_MERGE_THRESHOLD,
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    progress: CommitProgress | None = None,
) -> BatchImportResult:
    """Aggregate ``previews`` into one graph and commit it into ``season_id``."""

    started = time.monotonic()
    batch = aggregate_files(
        previews,
        auto_merge_threshold=auto_merge_threshold,
        thresholds=thresholds,
        progress_interval=progress_interval,
    )
    aggregated = [p for p in batch.files if p.status is FileImportStatus.PENDING]

    result = BatchImportResult(
        auto_merged_players=batch.graph.auto_merged,
        merge_suggestions=batch.graph.suggestions,
    )

    if aggregated:
        engine = CommitEngine(
            unit_of_work_factory=unit_of_work_factory,
            phases=default_phases(thresholds=thresholds),
        )
        result.commit = engine.commit(batch.graph, season_id, progress=progress)
        _settle_files(aggregated, result.commit)
        result.errors.extend(result.commit.errors)
    else:
        log.warning("No files could be aggregated; nothing to commit")

    _tally_files(batch, result)
    result.success = result.commit is not None and result.commit.success
    result.duration = timedelta(seconds=time.monotonic() - started)
    log.info("Import finished: %s", result.summary)
    return result


def _settle_files(previews: list[ImportFilePreview], commit: CommitResult) -> None:
    for preview in previews:
        if commit.success:
            preview.status = FileImportStatus.COMPLETED
        else:
            preview.mark_failed("Error processing file: batch commit was rolled back")


def _tally_files(batch: BatchPreview, result: BatchImportResult) -> None:
    for preview in batch.files:
        match preview.status:
            case FileImportStatus.SKIPPED:
                result.files_skipped += 1
                continue
            case FileImportStatus.COMPLETED:
                result.files_succeeded += 1
            case FileImportStatus.FAILED:
                result.files_failed += 1
                result.errors.extend(f"{preview.file_name}: {error}" for error in preview.errors)
            case _:
                pass
        result.files_processed += 1
        result.warnings.extend(f"{preview.file_name}: {warning}" for warning in preview.warnings)
