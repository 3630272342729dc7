"""Materialize a preview graph into the league store inside one unit of work."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from leaguemerge.domain.commit.context import CommitContext, CommitResult, SeasonNotFoundError
from leaguemerge.domain.commit.phases import (
    DivisionPhase,
    FixturePhase,
    FramePhase,
    PlayerPhase,
    TeamPhase,
)
from leaguemerge.domain.commit.season_span import SeasonSpanPhase
from leaguemerge.domain.matching import DEFAULT_THRESHOLDS

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from uuid import UUID

    from leaguemerge.domain.aggregation.graph import PreviewGraph
    from leaguemerge.domain.commit.phases import CommitPhase
    from leaguemerge.domain.matching import MatchThresholds
    from leaguemerge.domain.ports.unit_of_work import LeagueUnitOfWork

type CommitProgress = Callable[[float, str], None]

log = getLogger(__name__)


def default_phases(
    *, thresholds: MatchThresholds = DEFAULT_THRESHOLDS
) -> tuple[CommitPhase, ...]:
    return (
        DivisionPhase(),
        TeamPhase(),
        PlayerPhase(thresholds=thresholds),
        FixturePhase(),
        FramePhase(),
        SeasonSpanPhase(),
    )


@dataclass(slots=True)
class CommitEngine:
    """Run the commit phases in order against a fresh unit of work.

    Either every phase succeeds and the unit of work is committed, or the first
    exception rolls everything back and is reported in ``CommitResult.errors``.
    """

    unit_of_work_factory: Callable[[], LeagueUnitOfWork]
    phases: Sequence[CommitPhase] = field(default_factory=default_phases)

    def commit(
        self,
        graph: PreviewGraph,
        season_id: UUID,
        progress: CommitProgress | None = None,
    ) -> CommitResult:
        result = CommitResult()
        total = len(self.phases)
        step = "setup"

        try:
            with self.unit_of_work_factory() as uow:
                try:
                    season = uow.repositories.seasons.get(season_id)
                    if season is None:
                        raise SeasonNotFoundError(season_id)
                    context = CommitContext(
                        season=season, repositories=uow.repositories, result=result
                    )
                    for index, phase in enumerate(self.phases):
                        step = phase.name
                        _report(progress, index / total, phase.label)
                        phase.run(graph, context=context)
                        log.debug("Phase %s done", phase.name)
                    step = "commit"
                    uow.commit()
                except Exception:
                    uow.rollback()
                    raise
        except Exception as exc:  # noqa: BLE001
            log.exception("Commit failed during %s; rolled back", step)
            result.discard_counts()
            result.success = False
            result.errors.append(f"{step}: {exc}")
            return result

        result.success = True
        _report(progress, 1.0, "Complete")
        log.info(
            "Committed batch into season %s: %s",
            season_id,
            ", ".join(f"{name} {counts}" for name, counts in result.counts().items()),
        )
        return result


def _report(progress: CommitProgress | None, fraction: float, label: str) -> None:
    if progress is not None:
        progress(fraction, label)
