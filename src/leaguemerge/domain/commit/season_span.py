"""Recompute a season's date span from the fixtures on record."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from leaguemerge.domain.aggregation.graph import PreviewGraph
    from leaguemerge.domain.commit.context import CommitContext
    from leaguemerge.domain.model import Fixture, Season

log = getLogger(__name__)


def fixture_span(fixtures: list[Fixture]) -> tuple[date, date] | None:
    """Earliest and latest distinct fixture date, or ``None`` without fixtures."""

    dates = {fixture.date for fixture in fixtures}
    if not dates:
        return None
    return min(dates), max(dates)


def reconcile_season_span(season: Season, fixtures: list[Fixture]) -> bool:
    span = fixture_span(fixtures)
    if span is None:
        return False
    changed = season.update_span(*span)
    if changed:
        log.info("Season %s now spans %s to %s", season, *span)
    return changed


@dataclass(slots=True)
class SeasonSpanPhase:
    name: str = "season_span"
    label: str = "Updating season dates"

    def run(self, graph: PreviewGraph, *, context: CommitContext) -> None:
        fixtures = context.repositories.fixtures.list_for_season(context.season_id)
        context.result.season_span_updated = reconcile_season_span(context.season, fixtures)
