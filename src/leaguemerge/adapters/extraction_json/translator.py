"""Translate extraction payloads into domain extraction records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from leaguemerge.domain.extraction import (
    ExtractedPlayer,
    ExtractedPlayerProfile,
    ExtractedResult,
    ExtractedTeam,
    FileExtraction,
    PlayerMatchRecord,
)

if TYPE_CHECKING:
    from .schema import FileExtractionPayload, PlayerProfilePayload


def parse_file_extraction(payload: FileExtractionPayload, *, file_name: str) -> FileExtraction:
    """Build a ``FileExtraction``; ``payload.file_name`` wins over ``file_name`` when set."""

    return FileExtraction(
        file_name=payload.file_name or file_name,
        detected_division=payload.detected_division,
        results=[
            ExtractedResult(
                played_on=result.played_on,
                division=result.division,
                home_team=result.home_team,
                home_score=result.home_score,
                away_team=result.away_team,
                away_score=result.away_score,
            )
            for result in payload.results
        ],
        players=[
            ExtractedPlayer(name=player.name, team_name=player.team_name)
            for player in payload.players
        ],
        teams=[
            ExtractedTeam(name=team.name, division=team.division, position=team.position)
            for team in payload.teams
        ],
        player_profile=_parse_profile(payload.player_profile),
    )


def _parse_profile(payload: PlayerProfilePayload | None) -> ExtractedPlayerProfile | None:
    if payload is None:
        return None
    return ExtractedPlayerProfile(
        player_name=payload.player_name,
        team_name=payload.team_name,
        match_history=[
            PlayerMatchRecord(
                played_on=record.played_on,
                opponent_name=record.opponent_name,
                opponent_team=record.opponent_team,
                won=record.won,
                rating_attained=record.rating_attained,
            )
            for record in payload.match_history
        ],
    )
