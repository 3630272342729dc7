"""Batch aggregation: fold per-file extractions into one preview graph."""

from __future__ import annotations

from .aggregator import BatchAggregator, BatchPreview, aggregate_file, aggregate_files
from .arbiter import DEFAULT_AUTO_MERGE_THRESHOLD, MergeArbiter
from .graph import (
    DivisionPreview,
    PlayerFrameRecord,
    PlayerMergeSuggestion,
    PlayerPreview,
    PreviewGraph,
    TeamPreview,
)

__all__ = [
    "DEFAULT_AUTO_MERGE_THRESHOLD",
    "BatchAggregator",
    "BatchPreview",
    "DivisionPreview",
    "MergeArbiter",
    "PlayerFrameRecord",
    "PlayerMergeSuggestion",
    "PlayerPreview",
    "PreviewGraph",
    "TeamPreview",
    "aggregate_file",
    "aggregate_files",
]
