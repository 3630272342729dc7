"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from leaguemerge.adapters.extraction_json import load_extractions
from leaguemerge.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyLeagueUnitOfWork,
    is_started,
    startup,
)
from leaguemerge.config import MergeConfig, get_merge_config
from leaguemerge.domain.aggregation import aggregate_files
from leaguemerge.domain.data_integration import BatchImportResult, import_batch
from leaguemerge.domain.matching import MatchThresholds
from leaguemerge.domain.model import Season
from leaguemerge.domain.ports.unit_of_work import LeagueUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date
    from pathlib import Path
    from uuid import UUID

    from leaguemerge.domain.aggregation import BatchPreview
    from leaguemerge.domain.commit import CommitProgress
    from leaguemerge.domain.ports.fetching import ExtractionSource

UnitOfWorkFactory = Callable[[], LeagueUnitOfWork]


log = getLogger(__name__)


def _thresholds(config: MergeConfig) -> MatchThresholds:
    return MatchThresholds(
        same_name_max_distance=config.same_name_max_distance,
        both_names_max_distance=config.both_names_max_distance,
    )


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyLeagueUnitOfWork


def preview_extractions(
    paths: Iterable[Path],
    *,
    source: ExtractionSource | None = None,
    merge_config: MergeConfig | None = None,
) -> BatchPreview:
    """Aggregate extraction files without touching the league store."""

    config = merge_config or get_merge_config()
    previews = (source or load_extractions)(paths)
    return aggregate_files(
        previews,
        auto_merge_threshold=config.auto_merge_threshold,
        thresholds=_thresholds(config),
        progress_interval=config.yield_batch_size,
    )


def import_extractions(
    paths: Iterable[Path],
    *,
    season_id: UUID,
    source: ExtractionSource | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    merge_config: MergeConfig | None = None,
    progress: CommitProgress | None = None,
) -> BatchImportResult:
    """Load, aggregate and commit extraction files into ``season_id``."""

    config = merge_config or get_merge_config()
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    previews = (source or load_extractions)(paths)
    log.info(
        "Starting import of %d files into season %s (auto-merge threshold %d)",
        len(previews),
        season_id,
        config.auto_merge_threshold,
    )

    return import_batch(
        previews,
        season_id=season_id,
        unit_of_work_factory=effective_uow,
        auto_merge_threshold=config.auto_merge_threshold,
        thresholds=_thresholds(config),
        progress_interval=config.yield_batch_size,
        progress=progress,
    )


def create_season(
    *,
    name: str,
    start_date: date | None = None,
    end_date: date | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Season:
    """Persist a new active season."""

    if start_date and end_date and start_date > end_date:
        raise ValueError("Season start must not be after its end")
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    season = Season(name=name.strip(), start_date=start_date, end_date=end_date)
    with effective_uow() as uow:
        uow.repositories.seasons.add(season)
        uow.commit()
    log.info("Created season %s (%s)", season, season.id)
    return season
