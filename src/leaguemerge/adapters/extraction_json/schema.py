"""Pydantic models describing JSON extraction files written by the page parsers."""

from __future__ import annotations

from datetime import date, datetime
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DATE_FORMATS: Final[tuple[str, ...]] = ("%d/%m/%Y", "%d/%m/%y", "%d-%m-%Y")
_WON: Final[frozenset[str]] = frozenset({"won", "win", "w"})
_LOST: Final[frozenset[str]] = frozenset({"lost", "loss", "l"})


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _parse_date(value: object) -> object:
    if not isinstance(value, str):
        return value
    text = value.strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()  # noqa: DTZ007
        except ValueError:
            continue
    return date.fromisoformat(text[:10])


class ExtractionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ResultPayload(ExtractionBaseModel):
    played_on: date = Field(alias="date")
    division: str | None = None
    home_team: str
    home_score: int = 0
    away_team: str
    away_score: int = 0

    _normalize_date = field_validator("played_on", mode="before")(_parse_date)
    _normalize_division = field_validator("division", mode="before")(_blank_to_none)


class TeamPayload(ExtractionBaseModel):
    name: str
    division: str | None = None
    position: int | None = None

    _normalize_division = field_validator("division", mode="before")(_blank_to_none)

    @field_validator("position", mode="before")
    @classmethod
    def _parse_position(cls, value: object) -> object:
        value = _blank_to_none(value)
        if isinstance(value, str):
            return int(value.rstrip("stndrh."))
        return value


class PlayerPayload(ExtractionBaseModel):
    name: str
    team_name: str | None = Field(default=None, alias="team")

    _normalize_team = field_validator("team_name", mode="before")(_blank_to_none)


class MatchRecordPayload(ExtractionBaseModel):
    played_on: date = Field(alias="date")
    opponent_name: str = Field(alias="opponent")
    opponent_team: str | None = None
    result: str
    rating_attained: int | None = Field(default=None, alias="rating")

    _normalize_date = field_validator("played_on", mode="before")(_parse_date)
    _normalize_team = field_validator("opponent_team", "rating_attained", mode="before")(
        _blank_to_none
    )

    @field_validator("result", mode="before")
    @classmethod
    def _parse_result(cls, value: object) -> object:
        if isinstance(value, bool):
            return "Won" if value else "Lost"
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _WON:
                return "Won"
            if lowered in _LOST:
                return "Lost"
        raise ValueError(f"Result must be 'Won' or 'Lost', got {value!r}")

    @property
    def won(self) -> bool:
        return self.result == "Won"


class PlayerProfilePayload(ExtractionBaseModel):
    player_name: str = Field(alias="player")
    team_name: str | None = Field(default=None, alias="team")
    match_history: list[MatchRecordPayload] = Field(default_factory=list[MatchRecordPayload])

    _normalize_team = field_validator("team_name", mode="before")(_blank_to_none)


class FileExtractionPayload(ExtractionBaseModel):
    file_name: str | None = None
    detected_division: str | None = Field(default=None, alias="division")
    results: list[ResultPayload] = Field(default_factory=list[ResultPayload])
    players: list[PlayerPayload] = Field(default_factory=list[PlayerPayload])
    teams: list[TeamPayload] = Field(default_factory=list[TeamPayload])
    player_profile: PlayerProfilePayload | None = Field(default=None, alias="profile")

    _normalize_division = field_validator("detected_division", mode="before")(_blank_to_none)
