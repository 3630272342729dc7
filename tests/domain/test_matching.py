from __future__ import annotations

import pytest

from leaguemerge.domain.keys import PlayerKey
from leaguemerge.domain.matching import (
    COMMIT_RULES,
    MatchRule,
    MatchThresholds,
    NameParts,
    edit_distance,
    matching_rule,
    merge_reason,
    names_match,
    similarity_score,
)
from leaguemerge.domain.model import MergeReason

JOHN_SMITH = NameParts("JOHN", "SMITH")


def test_edit_distance_is_levenshtein() -> None:
    assert edit_distance("kitten", "sitting") == 3
    assert edit_distance("", "abc") == 3
    assert edit_distance("same", "same") == 0


@pytest.mark.parametrize(
    ("other", "rule"),
    [
        (NameParts("JON", "SMITH"), MatchRule.SAME_LAST_NAME),
        (NameParts("JOHN", "SMYTHE"), MatchRule.SAME_FIRST_NAME),
        (NameParts("JON", "SMYTH"), MatchRule.BOTH_NAMES_CLOSE),
        (NameParts("J", "SMITH"), MatchRule.INITIAL),
        (NameParts("SMITH", "JOHN"), MatchRule.TRANSPOSED),
        (NameParts("ALICE", "JONES"), None),
    ],
)
def test_matching_rule_reports_first_rule_that_fires(
    other: NameParts, rule: MatchRule | None
) -> None:
    assert matching_rule(other, JOHN_SMITH) is rule
    assert matching_rule(JOHN_SMITH, other) is rule


def test_commit_rules_leave_out_transposition() -> None:
    transposed = NameParts("SMITH", "JOHN")

    assert names_match(transposed, JOHN_SMITH)
    assert not names_match(transposed, JOHN_SMITH, rules=COMMIT_RULES)


def test_thresholds_bound_edit_distance() -> None:
    strict = MatchThresholds(same_name_max_distance=0, both_names_max_distance=0)

    assert not names_match(NameParts("JON", "SMITH"), JOHN_SMITH, thresholds=strict)
    assert names_match(NameParts("JOHN", "SMITH"), JOHN_SMITH, thresholds=strict)


def test_name_parts_use_key_form() -> None:
    parts = NameParts.for_key("John", "O'Neil")

    assert parts == NameParts("JOHN", "ONEIL")
    assert parts.key == PlayerKey("JOHN ONEIL")


def test_similarity_score_from_full_keys() -> None:
    assert similarity_score(PlayerKey("JOHN SMITH"), PlayerKey("JON SMITH")) == 90
    assert similarity_score(PlayerKey("JOHN SMITH"), PlayerKey("J SMITH")) == 70
    assert similarity_score(PlayerKey("ABC"), PlayerKey("XYZ")) == 0
    assert similarity_score(PlayerKey(""), PlayerKey("")) == 100


@pytest.mark.parametrize(
    ("a", "b", "reason"),
    [
        (NameParts("J", "SMITH"), JOHN_SMITH, MergeReason.SAME_LAST_NAME),
        (NameParts("JOHN", "SMYTHE"), JOHN_SMITH, MergeReason.SAME_FIRST_NAME),
        (NameParts("SMITH", "JOHN"), JOHN_SMITH, MergeReason.TRANSPOSED),
        (NameParts("J", "SMYTH"), JOHN_SMITH, MergeReason.INITIAL),
        (NameParts("JON", "SMYTH"), JOHN_SMITH, MergeReason.SIMILAR_SPELLING),
    ],
)
def test_merge_reason(a: NameParts, b: NameParts, reason: MergeReason) -> None:
    assert merge_reason(a, b) is reason
