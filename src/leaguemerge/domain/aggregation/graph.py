"""Batch-scoped preview graph shared by every file of one import."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING

from leaguemerge.domain.extraction import ExtractedResult
from leaguemerge.domain.keys import DivisionKey, FixtureKey, FrameKey, PlayerKey, TeamKey
from leaguemerge.domain.matching import NameParts

if TYPE_CHECKING:
    from datetime import date

    from leaguemerge.domain.model import MergeReason


@dataclass(slots=True, kw_only=True)
class DivisionPreview:
    name: str
    winner_team: str | None = None
    runner_up_team: str | None = None

    @property
    def key(self) -> DivisionKey:
        return DivisionKey.from_name(self.name)


@dataclass(slots=True, kw_only=True)
class TeamPreview:
    name: str
    division_name: str | None = None
    is_winner: bool = False
    is_runner_up: bool = False

    @property
    def key(self) -> TeamKey:
        return TeamKey.from_name(self.name)


@dataclass(slots=True, kw_only=True)
class PlayerPreview:
    first_name: str
    last_name: str
    team_name: str | None = None

    @property
    def key(self) -> PlayerKey:
        return PlayerKey.from_parts(self.first_name, self.last_name)

    @property
    def name_parts(self) -> NameParts:
        return NameParts.for_key(self.first_name, self.last_name)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(slots=True, kw_only=True)
class PlayerFrameRecord:
    """One frame as reported in a player's match history.

    ``player_key`` and ``opponent_key`` are the aggregated identities the names
    resolved to, so spelling variants of one player share a frame key.
    """

    played_on: date
    player_name: str
    player_team: str | None
    opponent_name: str
    opponent_team: str | None
    player_won: bool
    rating_attained: int | None = None
    player_key: PlayerKey
    opponent_key: PlayerKey

    @property
    def key(self) -> FrameKey:
        return FrameKey.from_names(self.played_on, self.player_key.value, self.opponent_key.value)


@dataclass(slots=True, kw_only=True)
class PlayerMergeSuggestion:
    """Two aggregated players that look alike but were not merged automatically."""

    player_key_1: PlayerKey
    player_key_2: PlayerKey
    name_1: str
    name_2: str
    team_1: str | None
    team_2: str | None
    similarity_score: int
    reason: MergeReason
    should_merge: bool = False

    @property
    def pair(self) -> frozenset[PlayerKey]:
        return frozenset((self.player_key_1, self.player_key_2))


@dataclass(slots=True)
class PreviewGraph:
    """Deduplicated entities collected from every file of one batch.

    Each mapping is keyed by its typed key, so a key holds at most one preview.
    ``player_aliases`` remembers which observed spelling was folded into which
    aggregated player, which keeps repeated sightings of a variant from being
    counted as fresh merges.
    """

    divisions: dict[DivisionKey, DivisionPreview] = field(
        default_factory=dict[DivisionKey, DivisionPreview]
    )
    teams: dict[TeamKey, TeamPreview] = field(default_factory=dict[TeamKey, TeamPreview])
    players: dict[PlayerKey, PlayerPreview] = field(default_factory=dict[PlayerKey, PlayerPreview])
    results: dict[FixtureKey, ExtractedResult] = field(
        default_factory=dict[FixtureKey, ExtractedResult]
    )
    frames: dict[FrameKey, PlayerFrameRecord] = field(
        default_factory=dict[FrameKey, PlayerFrameRecord]
    )
    merge_suggestions: dict[frozenset[PlayerKey], PlayerMergeSuggestion] = field(
        default_factory=dict[frozenset[PlayerKey], PlayerMergeSuggestion]
    )
    player_aliases: dict[PlayerKey, PlayerKey] = field(default_factory=dict[PlayerKey, PlayerKey])
    auto_merged: int = 0

    @property
    def suggestions(self) -> list[PlayerMergeSuggestion]:
        return list(self.merge_suggestions.values())

    @property
    def is_empty(self) -> bool:
        return not (self.divisions or self.teams or self.players or self.results or self.frames)

    def snapshot(self) -> PreviewGraph:
        """Independent copy of the graph, including its mutable previews."""

        return deepcopy(self)

    def restore(self, snapshot: PreviewGraph) -> None:
        """Put the state captured by ``snapshot`` back in place."""

        for graph_field in fields(self):
            setattr(self, graph_field.name, getattr(snapshot, graph_field.name))

    def add_suggestion(self, suggestion: PlayerMergeSuggestion) -> bool:
        """Record ``suggestion`` unless its unordered pair is already on file."""

        if suggestion.pair in self.merge_suggestions:
            return False
        self.merge_suggestions[suggestion.pair] = suggestion
        return True

    def add_result(self, key: FixtureKey, result: ExtractedResult) -> bool:
        if key in self.results:
            return False
        self.results[key] = result
        return True

    def add_frame(self, record: PlayerFrameRecord) -> bool:
        key = record.key
        if key in self.frames:
            return False
        self.frames[key] = record
        return True

    def resolve_player(self, key: PlayerKey) -> PlayerKey:
        return self.player_aliases.get(key, key)
