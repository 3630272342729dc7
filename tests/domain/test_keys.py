from __future__ import annotations

from datetime import date

import pytest

from leaguemerge.domain.keys import (
    DivisionKey,
    FixtureKey,
    FrameKey,
    PlayerKey,
    TeamKey,
    division_name,
    normalize_player_name,
    normalize_player_name_for_key,
    normalize_team_name,
    split_full_name,
)


def test_team_display_name_unifies_apostrophes() -> None:
    assert normalize_team_name("  o’brien`s bar ") == "O'BRIEN'S BAR"


def test_player_display_name_keeps_apostrophe() -> None:
    assert normalize_player_name("o‘neil") == "O'NEIL"


def test_player_key_form_strips_punctuation() -> None:
    assert normalize_player_name_for_key("O'Neil-Smith.") == "ONEIL SMITH"
    assert normalize_player_name_for_key(None) == ""


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("premier a", "Premier A"),
        ("PREMIER   league", "Premier League"),
        ("", ""),
        (None, ""),
    ],
)
def test_division_name_title_cases_tokens(raw: str | None, expected: str) -> None:
    assert division_name(raw) == expected


def test_split_full_name_on_first_whitespace_run() -> None:
    assert split_full_name("  John  van Dyke ") == ("John", "van Dyke")
    assert split_full_name("Cher") == ("Cher", "")
    assert split_full_name("   ") == ("", "")


def test_team_key_ignores_punctuation_case_and_ampersand() -> None:
    assert TeamKey.from_name("O'Brien's & Co") == TeamKey.from_name("obriens and co")
    assert TeamKey.from_name("O-Briens") == TeamKey.from_name("OBriens")
    assert TeamKey.from_name("Red Lion") != TeamKey.from_name("Red Lions")


def test_team_key_is_hashable_on_compact_form() -> None:
    teams = {TeamKey.from_name("O-Briens"): 1}

    assert teams[TeamKey.from_name("obriens")] == 1


def test_player_key_collapses_spelling_variants() -> None:
    assert PlayerKey.from_parts("John", "O'Neil") == PlayerKey("JOHN ONEIL")
    assert PlayerKey.from_full_name("john o’neil") == PlayerKey("JOHN ONEIL")
    assert not PlayerKey.from_parts("", "")


def test_frame_key_is_undirected() -> None:
    forward = FrameKey.from_names(date(2024, 1, 5), "JOHN SMITH", "BOB JONES")
    backward = FrameKey.from_names(date(2024, 1, 5), "bob jones", "john smith")

    assert forward == backward
    assert forward.value == "20240105|bob jones|john smith"


def test_fixture_key_is_directed() -> None:
    key = FixtureKey(date(2024, 1, 5), TeamKey.from_name("Red Lion"), TeamKey.from_name("Crown"))

    assert key.reversed() != key
    assert key.reversed().reversed() == key


def test_keys_of_different_types_never_compare_equal() -> None:
    assert DivisionKey("premier") != TeamKey("premier")
    assert PlayerKey("premier") != DivisionKey("premier")


@pytest.mark.parametrize("name", ["O'Brien's", "o’briens & co", "Red-Lion", " crown. "])
def test_team_key_is_stable_under_display_normalization(name: str) -> None:
    assert TeamKey.from_name(name) == TeamKey.from_name(normalize_team_name(name))


def test_apostrophe_variants_share_a_team_key() -> None:
    assert TeamKey.from_name("O'Brien's") == TeamKey.from_name("OBriens")
