"""Fuzzy player-identity matching.

Two call sites share one rule implementation: aggregation applies every rule,
commit applies all but the transposition rule. The two rule sets are exported
as ``AGGREGATION_RULES`` and ``COMMIT_RULES`` so callers pick one explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

from rapidfuzz.distance import Levenshtein

from leaguemerge.domain.keys import PlayerKey, normalize_player_name_for_key
from leaguemerge.domain.model import MergeReason

if TYPE_CHECKING:
    from collections.abc import Sequence


def edit_distance(a: str, b: str) -> int:
    """Unit-cost Levenshtein distance (insertions, deletions, substitutions)."""

    return Levenshtein.distance(a, b)


@dataclass(frozen=True, slots=True)
class NameParts:
    """A (first, last) pair already in key form."""

    first: str
    last: str

    @classmethod
    def for_key(cls, first_name: str | None, last_name: str | None) -> NameParts:
        return cls(
            first=normalize_player_name_for_key(first_name),
            last=normalize_player_name_for_key(last_name),
        )

    @property
    def key(self) -> PlayerKey:
        return PlayerKey(f"{self.first} {self.last}".strip())


@dataclass(frozen=True, slots=True)
class MatchThresholds:
    same_name_max_distance: int = 2
    both_names_max_distance: int = 1


DEFAULT_THRESHOLDS: Final[MatchThresholds] = MatchThresholds()


class MatchRule(StrEnum):
    SAME_LAST_NAME = "same_last_name"
    SAME_FIRST_NAME = "same_first_name"
    BOTH_NAMES_CLOSE = "both_names_close"
    INITIAL = "initial"
    TRANSPOSED = "transposed"


AGGREGATION_RULES: Final[tuple[MatchRule, ...]] = (
    MatchRule.SAME_LAST_NAME,
    MatchRule.SAME_FIRST_NAME,
    MatchRule.BOTH_NAMES_CLOSE,
    MatchRule.INITIAL,
    MatchRule.TRANSPOSED,
)
COMMIT_RULES: Final[tuple[MatchRule, ...]] = AGGREGATION_RULES[:4]


def _is_initial_of(a: str, b: str) -> bool:
    return len(a) == 1 and b.lower().startswith(a.lower())


def _rule_fires(
    rule: MatchRule, a: NameParts, b: NameParts, thresholds: MatchThresholds
) -> bool:
    match rule:
        case MatchRule.SAME_LAST_NAME:
            return (
                a.last == b.last
                and edit_distance(a.first, b.first) <= thresholds.same_name_max_distance
            )
        case MatchRule.SAME_FIRST_NAME:
            return (
                a.first == b.first
                and edit_distance(a.last, b.last) <= thresholds.same_name_max_distance
            )
        case MatchRule.BOTH_NAMES_CLOSE:
            return (
                edit_distance(a.first, b.first) <= thresholds.both_names_max_distance
                and edit_distance(a.last, b.last) <= thresholds.both_names_max_distance
            )
        case MatchRule.INITIAL:
            initial = _is_initial_of(a.first, b.first) or _is_initial_of(b.first, a.first)
            return initial and a.last == b.last
        case MatchRule.TRANSPOSED:
            return a.first == b.last and a.last == b.first


def matching_rule(
    a: NameParts,
    b: NameParts,
    *,
    rules: Sequence[MatchRule] = AGGREGATION_RULES,
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
) -> MatchRule | None:
    """Return the first rule (in ``rules`` order) that considers ``a`` and ``b`` the same."""

    for rule in rules:
        if _rule_fires(rule, a, b, thresholds):
            return rule
    return None


def names_match(
    a: NameParts,
    b: NameParts,
    *,
    rules: Sequence[MatchRule] = AGGREGATION_RULES,
    thresholds: MatchThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    return matching_rule(a, b, rules=rules, thresholds=thresholds) is not None


def similarity_score(key_a: PlayerKey, key_b: PlayerKey) -> int:
    """Integer score in [0, 100] derived from the edit distance of two full keys."""

    longest = max(len(key_a.value), len(key_b.value))
    if longest == 0:
        return 100
    distance = edit_distance(key_a.value, key_b.value)
    return 100 - (distance * 100) // longest


def merge_reason(a: NameParts, b: NameParts) -> MergeReason:
    if a.last == b.last:
        return MergeReason.SAME_LAST_NAME
    if a.first == b.first:
        return MergeReason.SAME_FIRST_NAME
    if a.first == b.last and a.last == b.first:
        return MergeReason.TRANSPOSED
    if _is_initial_of(a.first, b.first) or _is_initial_of(b.first, a.first):
        return MergeReason.INITIAL
    return MergeReason.SIMILAR_SPELLING
