"""Public interface for the JSON extraction adapter."""

from __future__ import annotations

from .fetcher import load_extraction_file, load_extractions
from .schema import FileExtractionPayload, MatchRecordPayload, ResultPayload
from .translator import parse_file_extraction

__all__ = [
    "FileExtractionPayload",
    "MatchRecordPayload",
    "ResultPayload",
    "load_extraction_file",
    "load_extractions",
    "parse_file_extraction",
]
