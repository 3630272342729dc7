"""Ports for reading per-file extractions produced by external parsers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from leaguemerge.domain.extraction import ImportFilePreview


@runtime_checkable
class ExtractionSource(Protocol):
    """Callable port turning source paths into file previews.

    A file that cannot be read is returned as a failed preview rather than
    raised, so one broken file never hides the others.
    """

    def __call__(self, paths: Iterable[Path]) -> list[ImportFilePreview]: ...


__all__ = ["ExtractionSource"]
