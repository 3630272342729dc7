"""Fold per-file extractions into one deduplicated preview graph.

Files can be folded in any order and any number of times; only fields that are
first-writer-wins (a division's winner, a team's division) depend on order.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING

from leaguemerge.domain.aggregation.arbiter import DEFAULT_AUTO_MERGE_THRESHOLD, MergeArbiter
from leaguemerge.domain.aggregation.graph import (
    DivisionPreview,
    PlayerFrameRecord,
    PreviewGraph,
    TeamPreview,
)
from leaguemerge.domain.extraction import ImportFilePreview
from leaguemerge.domain.keys import (
    DivisionKey,
    FixtureKey,
    TeamKey,
    division_name,
    normalize_team_name,
    split_full_name,
)
from leaguemerge.domain.matching import DEFAULT_THRESHOLDS
from leaguemerge.domain.model import FileImportStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from leaguemerge.domain.extraction import (
        ExtractedPlayerProfile,
        ExtractedResult,
        FileExtraction,
    )
    from leaguemerge.domain.keys import PlayerKey
    from leaguemerge.domain.matching import MatchThresholds

log = getLogger(__name__)

DEFAULT_PROGRESS_INTERVAL = 10


def aggregate_file(
    graph: PreviewGraph, extraction: FileExtraction, arbiter: MergeArbiter | None = None
) -> None:
    """Fold one file into ``graph``: divisions, teams, players, frames, then results."""

    arbiter = arbiter or MergeArbiter(graph)
    detected = extraction.detected_division

    _register_division(graph, detected)
    for result in extraction.results:
        _register_division(graph, result.division or detected)

    for team in extraction.teams:
        _register_team(graph, team.name, team.division or detected, team.position)
    for result in extraction.results:
        division = result.division or detected
        _register_team(graph, result.home_team, division)
        _register_team(graph, result.away_team, division)
    for player in extraction.players:
        _register_team(graph, player.team_name, detected)
    profile = extraction.player_profile
    if profile is not None:
        _register_team(graph, profile.team_name, detected)
        for row in profile.match_history:
            _register_team(graph, row.opponent_team, detected)

    for player in extraction.players:
        _register_player(arbiter, player.name, player.team_name)

    if profile is not None:
        _aggregate_profile(graph, arbiter, profile)

    for result in extraction.results:
        _register_result(graph, result, detected)


def _register_division(graph: PreviewGraph, name: str | None) -> DivisionPreview | None:
    key = DivisionKey.from_name(name)
    if not key.value:
        return None
    preview = graph.divisions.get(key)
    if preview is None:
        preview = DivisionPreview(name=division_name(name))
        graph.divisions[key] = preview
    return preview


def _register_team(
    graph: PreviewGraph,
    name: str | None,
    division: str | None,
    position: int | None = None,
) -> TeamPreview | None:
    key = TeamKey.from_name(name)
    if not key.value:
        return None
    division_preview = _register_division(graph, division)

    team = graph.teams.get(key)
    if team is not None:
        if team.division_name is None and division_preview is not None:
            team.division_name = division_preview.name
        return team

    team = TeamPreview(
        name=normalize_team_name(name),
        division_name=division_preview.name if division_preview else None,
        is_winner=position == 1,
        is_runner_up=position == 2,
    )
    graph.teams[key] = team
    if division_preview is not None:
        if team.is_winner and division_preview.winner_team is None:
            division_preview.winner_team = team.name
        if team.is_runner_up and division_preview.runner_up_team is None:
            division_preview.runner_up_team = team.name
    return team


def _register_player(
    arbiter: MergeArbiter, full_name: str | None, team_name: str | None
) -> PlayerKey | None:
    first, last = split_full_name(full_name)
    if not first:
        return None
    return arbiter.register(first, last, team_name)


def _aggregate_profile(
    graph: PreviewGraph, arbiter: MergeArbiter, profile: ExtractedPlayerProfile
) -> None:
    player_key = _register_player(arbiter, profile.player_name, profile.team_name)
    if player_key is None:
        return
    for row in profile.match_history:
        opponent_key = _register_player(arbiter, row.opponent_name, row.opponent_team)
        if opponent_key is None:
            continue
        player = graph.players[player_key]
        opponent = graph.players[opponent_key]
        graph.add_frame(
            PlayerFrameRecord(
                played_on=row.played_on,
                player_name=player.full_name,
                player_team=normalize_team_name(profile.team_name) or player.team_name,
                opponent_name=opponent.full_name,
                opponent_team=normalize_team_name(row.opponent_team) or opponent.team_name,
                player_won=row.won,
                rating_attained=row.rating_attained,
                player_key=player_key,
                opponent_key=opponent_key,
            )
        )


def _register_result(graph: PreviewGraph, result: ExtractedResult, detected: str | None) -> None:
    home = TeamKey.from_name(result.home_team)
    away = TeamKey.from_name(result.away_team)
    if not home.value or not away.value:
        return
    normalized = replace(
        result,
        division=division_name(result.division or detected) or None,
        home_team=normalize_team_name(result.home_team),
        away_team=normalize_team_name(result.away_team),
    )
    graph.add_result(FixtureKey(result.played_on, home, away), normalized)


@dataclass(slots=True)
class BatchPreview:
    """Preview graph of a batch together with the per-file outcomes."""

    graph: PreviewGraph
    files: list[ImportFilePreview] = field(default_factory=list[ImportFilePreview])

    @property
    def selected_files(self) -> list[ImportFilePreview]:
        return [preview for preview in self.files if preview.include]

    @property
    def failed_files(self) -> list[ImportFilePreview]:
        return [preview for preview in self.files if preview.status is FileImportStatus.FAILED]

    @property
    def has_errors(self) -> bool:
        return any(preview.has_errors for preview in self.files)


@dataclass(slots=True)
class BatchAggregator:
    """Aggregate file previews one at a time into a private ``PreviewGraph``."""

    auto_merge_threshold: int = DEFAULT_AUTO_MERGE_THRESHOLD
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
    graph: PreviewGraph = field(default_factory=PreviewGraph)
    files: list[ImportFilePreview] = field(default_factory=list[ImportFilePreview])
    _arbiter: MergeArbiter = field(init=False)

    def __post_init__(self) -> None:
        self._arbiter = MergeArbiter(
            self.graph,
            auto_merge_threshold=self.auto_merge_threshold,
            thresholds=self.thresholds,
        )

    def add(self, preview: ImportFilePreview) -> ImportFilePreview:
        """Fold ``preview`` into the graph; a failing file leaves the graph untouched."""

        self.files.append(preview)
        if not preview.include:
            preview.status = FileImportStatus.SKIPPED
            return preview
        if preview.status is FileImportStatus.FAILED:
            return preview
        if preview.extraction is None:
            preview.mark_failed("No data extracted from file")
            return preview

        preview.status = FileImportStatus.PROCESSING
        before = self.graph.snapshot()
        try:
            aggregate_file(self.graph, preview.extraction, self._arbiter)
        except Exception as exc:  # noqa: BLE001
            log.exception("Failed to aggregate %s", preview.file_name)
            self.graph.restore(before)
            preview.mark_failed(f"Error processing file: {exc}")
        else:
            preview.status = FileImportStatus.PENDING
        return preview

    def extend(self, previews: Iterable[ImportFilePreview]) -> BatchPreview:
        for index, preview in enumerate(previews, start=1):
            self.add(preview)
            if self.progress_interval and index % self.progress_interval == 0:
                log.info("Aggregated %d files", index)
        return self.preview()

    def preview(self) -> BatchPreview:
        return BatchPreview(graph=self.graph, files=list(self.files))


def aggregate_files(
    previews: Iterable[ImportFilePreview],
    *,
    auto_merge_threshold: int = DEFAULT_AUTO_MERGE_THRESHOLD,
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
) -> BatchPreview:
    """Aggregate ``previews`` into a fresh graph and return the batch preview."""

    aggregator = BatchAggregator(
        auto_merge_threshold=auto_merge_threshold,
        thresholds=thresholds,
        progress_interval=progress_interval,
    )
    batch = aggregator.extend(previews)
    log.info(
        "Aggregated %d files: %d divisions, %d teams, %d players, %d results, %d frames",
        len(batch.files),
        len(batch.graph.divisions),
        len(batch.graph.teams),
        len(batch.graph.players),
        len(batch.graph.results),
        len(batch.graph.frames),
    )
    return batch
