"""Per-file extraction records handed to the aggregator.

These are the shapes produced by the parsers sitting in front of this package
(HTML league pages, legacy SQL dumps). The aggregator only ever reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from leaguemerge.domain.model import FileImportStatus

if TYPE_CHECKING:
    from datetime import date


@dataclass(slots=True, kw_only=True)
class ExtractedResult:
    """One team-level fixture outcome as printed on a results page."""

    played_on: date
    division: str | None = None
    home_team: str
    home_score: int = 0
    away_team: str
    away_score: int = 0


@dataclass(slots=True, kw_only=True)
class ExtractedTeam:
    name: str
    division: str | None = None
    position: int | None = None  # final league position, 1-based


@dataclass(slots=True, kw_only=True)
class ExtractedPlayer:
    name: str
    team_name: str | None = None


@dataclass(slots=True, kw_only=True)
class PlayerMatchRecord:
    """One row of a player profile's match history, seen from the profile owner."""

    played_on: date
    opponent_name: str
    opponent_team: str | None = None
    won: bool
    rating_attained: int | None = None


@dataclass(slots=True, kw_only=True)
class ExtractedPlayerProfile:
    player_name: str
    team_name: str | None = None
    match_history: list[PlayerMatchRecord] = field(default_factory=list[PlayerMatchRecord])


@dataclass(slots=True, kw_only=True)
class FileExtraction:
    file_name: str
    detected_division: str | None = None
    results: list[ExtractedResult] = field(default_factory=list[ExtractedResult])
    players: list[ExtractedPlayer] = field(default_factory=list[ExtractedPlayer])
    teams: list[ExtractedTeam] = field(default_factory=list[ExtractedTeam])
    player_profile: ExtractedPlayerProfile | None = None

    @property
    def total_records(self) -> int:
        profile_rows = len(self.player_profile.match_history) if self.player_profile else 0
        return len(self.results) + len(self.players) + len(self.teams) + profile_rows


@dataclass(slots=True, kw_only=True)
class ImportFilePreview:
    """Outcome of reading and folding one source file into a batch."""

    file_name: str
    extraction: FileExtraction | None = None
    include: bool = True
    status: FileImportStatus = FileImportStatus.PENDING
    errors: list[str] = field(default_factory=list[str])
    warnings: list[str] = field(default_factory=list[str])

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def total_records(self) -> int:
        return self.extraction.total_records if self.extraction else 0

    def mark_failed(self, message: str) -> None:
        self.status = FileImportStatus.FAILED
        self.errors.append(message)

    @classmethod
    def failed(cls, file_name: str, message: str) -> ImportFilePreview:
        preview = cls(file_name=file_name)
        preview.mark_failed(message)
        return preview
