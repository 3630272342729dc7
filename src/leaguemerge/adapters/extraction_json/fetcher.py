"""Load JSON extraction files into file previews."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from leaguemerge.domain.extraction import ImportFilePreview

from .schema import FileExtractionPayload
from .translator import parse_file_extraction

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

log = getLogger(__name__)


def load_extraction_file(path: Path) -> ImportFilePreview:
    """Read one extraction file; unreadable or invalid files become failed previews."""

    try:
        payload = FileExtractionPayload.model_validate_json(path.read_bytes())
    except OSError as exc:
        log.warning("Could not read %s: %s", path, exc)
        return ImportFilePreview.failed(path.name, f"Error reading file: {exc}")
    except ValidationError as exc:
        log.warning("Invalid extraction in %s: %d error(s)", path, exc.error_count())
        return ImportFilePreview.failed(path.name, f"Invalid extraction data: {exc}")

    extraction = parse_file_extraction(payload, file_name=path.name)
    preview = ImportFilePreview(file_name=path.name, extraction=extraction)
    if extraction.total_records == 0:
        preview.warnings.append("No league data found in file")
    return preview


def load_extractions(paths: Iterable[Path]) -> list[ImportFilePreview]:
    previews = [load_extraction_file(path) for path in paths]
    log.info("Loaded %d extraction files", len(previews))
    return previews
