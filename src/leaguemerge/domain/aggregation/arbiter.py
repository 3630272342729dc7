"""Decide whether a newly observed player is new, a silent merge, or a flagged duplicate."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from leaguemerge.domain.aggregation.graph import PlayerMergeSuggestion, PlayerPreview
from leaguemerge.domain.keys import normalize_player_name, normalize_team_name
from leaguemerge.domain.matching import (
    AGGREGATION_RULES,
    DEFAULT_THRESHOLDS,
    MatchThresholds,
    NameParts,
    matching_rule,
    merge_reason,
    similarity_score,
)

if TYPE_CHECKING:
    from leaguemerge.domain.aggregation.graph import PreviewGraph
    from leaguemerge.domain.keys import PlayerKey
    from leaguemerge.domain.matching import MatchRule

log = getLogger(__name__)

DEFAULT_AUTO_MERGE_THRESHOLD: Final[int] = 90


@dataclass(slots=True)
class MergeArbiter:
    """Register player sightings against one ``PreviewGraph``.

    Every aggregated player is scanned before deciding. A sighting is folded into
    the best fuzzy match that plays for the same team or reaches
    ``auto_merge_threshold``, preferring same-team matches and then higher
    scores. Only when no match qualifies are the fuzzy matches recorded as merge
    suggestions and the sighting admitted as a separate player.
    """

    graph: PreviewGraph
    auto_merge_threshold: int = DEFAULT_AUTO_MERGE_THRESHOLD
    thresholds: MatchThresholds = field(default=DEFAULT_THRESHOLDS)

    def register(self, first_name: str, last_name: str, team_name: str | None) -> PlayerKey:
        """Return the aggregated key ``first_name last_name`` resolves to."""

        candidate = NameParts.for_key(first_name, last_name)
        observed_key = candidate.key
        team = normalize_team_name(team_name) or None

        known_key = self.graph.player_aliases.get(observed_key, observed_key)
        existing = self.graph.players.get(known_key)
        if existing is not None:
            _adopt_team(existing, team)
            return known_key

        merge_into: tuple[bool, int, PlayerKey, MatchRule] | None = None
        flagged: list[tuple[PlayerKey, PlayerPreview, int]] = []
        for key, player in self.graph.players.items():
            other = player.name_parts
            rule = matching_rule(
                candidate, other, rules=AGGREGATION_RULES, thresholds=self.thresholds
            )
            if rule is None:
                continue
            score = similarity_score(observed_key, key)
            same_team = normalize_team_name(player.team_name) == (team or "")
            if same_team or score >= self.auto_merge_threshold:
                if merge_into is None or (same_team, score) > merge_into[:2]:
                    merge_into = (same_team, score, key, rule)
            else:
                flagged.append((key, player, score))

        if merge_into is not None:
            _, score, key, rule = merge_into
            log.debug("Auto-merged %s into %s (%s, score %d)", observed_key, key, rule, score)
            self.graph.player_aliases[observed_key] = key
            self.graph.auto_merged += 1
            _adopt_team(self.graph.players[key], team)
            return key

        for key, player, score in flagged:
            self.graph.add_suggestion(
                PlayerMergeSuggestion(
                    player_key_1=key,
                    player_key_2=observed_key,
                    name_1=player.full_name,
                    name_2=_display_name(first_name, last_name),
                    team_1=player.team_name,
                    team_2=team,
                    similarity_score=score,
                    reason=merge_reason(player.name_parts, candidate),
                )
            )

        self.graph.players[observed_key] = PlayerPreview(
            first_name=normalize_player_name(first_name),
            last_name=normalize_player_name(last_name),
            team_name=team,
        )
        return observed_key


def _adopt_team(player: PlayerPreview, team: str | None) -> None:
    if player.team_name is None and team:
        player.team_name = team


def _display_name(first_name: str, last_name: str) -> str:
    return f"{normalize_player_name(first_name)} {normalize_player_name(last_name)}".strip()
