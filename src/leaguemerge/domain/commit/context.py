"""Shared state for one commit run (identifier maps + result counters)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import UUID

from leaguemerge.domain.keys import DivisionKey, FixtureKey, PlayerKey, TeamKey
from leaguemerge.domain.model import Fixture

if TYPE_CHECKING:
    from leaguemerge.domain.model import Season
    from leaguemerge.domain.ports.unit_of_work import LeagueRepositories


class SeasonNotFoundError(LookupError):
    """Raised when a commit targets a season the store does not hold."""

    def __init__(self, season_id: UUID) -> None:
        super().__init__(f"Season {season_id} not found")
        self.season_id = season_id


@dataclass(slots=True)
class EntityCounts:
    created: int = 0
    skipped: int = 0

    def __str__(self) -> str:
        return f"{self.created} created, {self.skipped} skipped"


@dataclass(slots=True)
class CommitResult:
    """Per-type created/skipped counts of one commit run."""

    divisions: EntityCounts = field(default_factory=EntityCounts)
    teams: EntityCounts = field(default_factory=EntityCounts)
    players: EntityCounts = field(default_factory=EntityCounts)
    fixtures: EntityCounts = field(default_factory=EntityCounts)
    frames: EntityCounts = field(default_factory=EntityCounts)
    season_span_updated: bool = False
    success: bool = False
    errors: list[str] = field(default_factory=list[str])

    def counts(self) -> dict[str, EntityCounts]:
        return {
            "divisions": self.divisions,
            "teams": self.teams,
            "players": self.players,
            "fixtures": self.fixtures,
            "frames": self.frames,
        }

    @property
    def total_created(self) -> int:
        return sum(counts.created for counts in self.counts().values())

    @property
    def total_skipped(self) -> int:
        return sum(counts.skipped for counts in self.counts().values())

    def discard_counts(self) -> None:
        """Zero every counter; used after a rollback left the store untouched."""

        for counts in self.counts().values():
            counts.created = 0
            counts.skipped = 0
        self.season_span_updated = False


@dataclass(slots=True)
class CommitContext:
    """Mutable context shared across commit phases.

    Each phase fills the identifier map the next phase resolves references
    through, so one preview key yields one identifier for the whole run.
    """

    season: Season
    repositories: LeagueRepositories
    result: CommitResult = field(default_factory=CommitResult)
    division_ids: dict[DivisionKey, UUID] = field(default_factory=dict[DivisionKey, UUID])
    team_ids: dict[TeamKey, UUID] = field(default_factory=dict[TeamKey, UUID])
    team_divisions: dict[UUID, UUID | None] = field(default_factory=dict[UUID, UUID | None])
    player_ids: dict[PlayerKey, UUID] = field(default_factory=dict[PlayerKey, UUID])
    fixtures: dict[FixtureKey, Fixture] = field(default_factory=dict[FixtureKey, Fixture])
    known_fixtures: list[Fixture] = field(default_factory=list[Fixture])
    counted_fixtures: set[UUID] = field(default_factory=set[UUID])

    @property
    def season_id(self) -> UUID:
        return self.season.id

    def division_id(self, name: str | None) -> UUID | None:
        if not name:
            return None
        return self.division_ids.get(DivisionKey.from_name(name))

    def team_id(self, name: str | None) -> UUID | None:
        if not name:
            return None
        return self.team_ids.get(TeamKey.from_name(name))
