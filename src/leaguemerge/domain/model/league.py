"""Persisted league entities: seasons, divisions, teams, players and fixtures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from leaguemerge.domain.model.entity import Entity, SeasonScopedEntity
from leaguemerge.domain.model.enums import EntityType, FrameWinner

if TYPE_CHECKING:
    from datetime import date
    from uuid import UUID


@dataclass(eq=False, kw_only=True)
class Season(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.SEASON

    name: str
    start_date: date | None = None
    end_date: date | None = None
    is_active: bool = True

    def update_span(self, start: date, end: date) -> bool:
        """Set the season's date span; return whether anything changed."""

        if self.start_date == start and self.end_date == end:
            return False
        self.start_date = start
        self.end_date = end
        return True

    def __str__(self) -> str:
        if self.name.strip():
            return self.name
        return f"{self.start_date} - {self.end_date}"


@dataclass(eq=False, kw_only=True)
class Division(SeasonScopedEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.DIVISION

    name: str
    notes: str | None = None


@dataclass(eq=False, kw_only=True)
class Team(SeasonScopedEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.TEAM

    name: str
    division_id: UUID | None = None


@dataclass(eq=False, kw_only=True)
class Player(SeasonScopedEntity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.PLAYER

    first_name: str
    last_name: str
    team_id: UUID | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(eq=False, kw_only=True)
class FrameResult(Entity):
    """One game inside a fixture, home player against away player."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.FRAME_RESULT

    number: int  # 1-based
    home_player_id: UUID | None = None
    away_player_id: UUID | None = None
    winner: FrameWinner = FrameWinner.NONE
    home_player_rating: int | None = None
    away_player_rating: int | None = None

    def pairs(self, home_player_id: UUID, away_player_id: UUID) -> bool:
        """Return whether the frame was played between the two players, either way round."""

        forward = (self.home_player_id, self.away_player_id) == (home_player_id, away_player_id)
        reverse = (self.home_player_id, self.away_player_id) == (away_player_id, home_player_id)
        return forward or reverse


@dataclass(eq=False, kw_only=True)
class Fixture(SeasonScopedEntity):
    """A match between two teams on one date, owning its frames in play order."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.FIXTURE

    date: date
    home_team_id: UUID
    away_team_id: UUID
    division_id: UUID | None = None
    frames: list[FrameResult] = field(default_factory=list[FrameResult])

    @property
    def home_score(self) -> int:
        return sum(1 for frame in self.frames if frame.winner == FrameWinner.HOME)

    @property
    def away_score(self) -> int:
        return sum(1 for frame in self.frames if frame.winner == FrameWinner.AWAY)

    def is_between(self, home_team_id: UUID, away_team_id: UUID) -> bool:
        return self.home_team_id == home_team_id and self.away_team_id == away_team_id

    def has_frame_between(self, home_player_id: UUID, away_player_id: UUID) -> bool:
        return any(frame.pairs(home_player_id, away_player_id) for frame in self.frames)

    def add_frame(
        self,
        *,
        home_player_id: UUID,
        away_player_id: UUID,
        winner: FrameWinner,
        home_player_rating: int | None = None,
        away_player_rating: int | None = None,
    ) -> FrameResult:
        frame = FrameResult(
            number=len(self.frames) + 1,
            home_player_id=home_player_id,
            away_player_id=away_player_id,
            winner=winner,
            home_player_rating=home_player_rating,
            away_player_rating=away_player_rating,
        )
        self.frames.append(frame)
        return frame
