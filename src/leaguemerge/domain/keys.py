"""Name normalization and typed deduplication keys.

Display forms keep apostrophes so stored names read naturally; key forms strip
punctuation so spelling variants written by different people collapse onto one
identity. Every key is a frozen value object wrapping its canonical string, and
two keys of different types never compare equal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from datetime import date

APOSTROPHE: Final[str] = "'"

_APOSTROPHE_VARIANTS: Final = str.maketrans(
    {
        "‘": APOSTROPHE,  # left single quotation mark
        "’": APOSTROPHE,  # right single quotation mark
        "‛": APOSTROPHE,  # single high-reversed-9 quotation mark
        "′": APOSTROPHE,  # prime
        "ʼ": APOSTROPHE,  # modifier letter apostrophe
        "´": APOSTROPHE,  # acute accent
        "`": APOSTROPHE,
    }
)
_KEY_PUNCTUATION: Final = str.maketrans({APOSTROPHE: None, ".": None, ",": None, "-": " "})
_WHITESPACE: Final = re.compile(r"\s+")


def _collapse_whitespace(value: str) -> str:
    return _WHITESPACE.sub(" ", value).strip()


def _canonical_upper(value: str | None) -> str:
    if not value:
        return ""
    return value.upper().translate(_APOSTROPHE_VARIANTS)


def normalize_team_name(name: str | None) -> str:
    """Uppercase display form of a team name with a single apostrophe glyph."""

    return _canonical_upper(name).strip()


def normalize_player_name(part: str | None) -> str:
    """Uppercase display form of a first or last name (apostrophes retained)."""

    return _canonical_upper(part).strip()


def normalize_player_name_for_key(part: str | None) -> str:
    """Comparison form of a first or last name: no apostrophes, periods or commas."""

    return _collapse_whitespace(_canonical_upper(part).translate(_KEY_PUNCTUATION))


def division_name(name: str | None) -> str:
    """Title-case each token; single-letter tokens are fully uppercased."""

    if not name:
        return ""
    tokens = name.split()
    return " ".join(
        token.upper() if len(token) == 1 else token[0].upper() + token[1:].lower()
        for token in tokens
    )


def split_full_name(full_name: str | None) -> tuple[str, str]:
    """Split ``full_name`` on its first whitespace run into ``(first, last)``."""

    if not full_name:
        return "", ""
    parts = full_name.strip().split(None, 1)
    if not parts:
        return "", ""
    first = parts[0]
    last = parts[1].strip() if len(parts) > 1 else ""
    return first, last


@dataclass(frozen=True, slots=True)
class DivisionKey:
    value: str

    @classmethod
    def from_name(cls, name: str | None) -> DivisionKey:
        return cls(division_name(name).lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class TeamKey:
    """Team identity; equal iff two names differ only in punctuation, case or ``&``.

    ``value`` keeps word boundaries for display, equality uses the compacted form so
    ``O-Briens`` and ``OBriens`` resolve to the same team.
    """

    value: str = field(compare=False)
    compact: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "compact", self.value.replace(" ", ""))

    @classmethod
    def from_name(cls, name: str | None) -> TeamKey:
        normalized = normalize_team_name(name).translate(_KEY_PUNCTUATION).replace("&", " AND ")
        return cls(_collapse_whitespace(normalized))

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PlayerKey:
    value: str

    @classmethod
    def from_parts(cls, first_name: str | None, last_name: str | None) -> PlayerKey:
        first = normalize_player_name_for_key(first_name)
        last = normalize_player_name_for_key(last_name)
        return cls(f"{first} {last}".strip())

    @classmethod
    def from_full_name(cls, full_name: str | None) -> PlayerKey:
        return cls.from_parts(*split_full_name(full_name))

    def __bool__(self) -> bool:
        return bool(self.value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FrameKey:
    """Undirected frame identity: the same frame reported by either player collapses."""

    value: str

    @classmethod
    def from_names(cls, played_on: date, name_a: str, name_b: str) -> FrameKey:
        first, second = sorted((name_a.lower(), name_b.lower()))
        return cls(f"{played_on:%Y%m%d}|{first}|{second}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class FixtureKey:
    """Directed fixture identity: home and away are not interchangeable."""

    played_on: date
    home: TeamKey
    away: TeamKey

    def reversed(self) -> FixtureKey:
        return FixtureKey(self.played_on, self.away, self.home)
