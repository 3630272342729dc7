from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from leaguemerge.app import create_season, import_extractions, preview_extractions
from leaguemerge.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from leaguemerge.domain.aggregation import PlayerMergeSuggestion

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Merge extracted league data")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output, including every auto-merge decision",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    preview = subparsers.add_parser("preview", help="Aggregate files without committing")
    preview.add_argument("files", nargs="+", type=Path, help="JSON extraction files")

    import_ = subparsers.add_parser("import", help="Aggregate files and commit them")
    import_.add_argument(
        "--season-id",
        type=str,
        required=True,
        help="Existing season id to import into",
    )
    import_.add_argument("files", nargs="+", type=Path, help="JSON extraction files")

    season = subparsers.add_parser("season", help="Season management commands")
    season_sub = season.add_subparsers(dest="season_command", required=True)
    season_create = season_sub.add_parser("create", help="Create a season")
    season_create.add_argument(
        "--name",
        type=str,
        required=True,
        help="Display name for the season",
    )
    season_create.add_argument(
        "--start",
        type=str,
        help="ISO date of the first fixture (defaults to the imported span)",
    )
    season_create.add_argument(
        "--end",
        type=str,
        help="ISO date of the last fixture (defaults to the imported span)",
    )

    return parser.parse_args(list(argv))


def _parse_iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid ISO date: {value}") from exc


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _log_suggestions(suggestions: Sequence[PlayerMergeSuggestion]) -> None:
    for suggestion in suggestions:
        log.info(
            "Possible duplicate: %s (%s) / %s (%s), score %d, %s",
            suggestion.name_1,
            suggestion.team_1 or "-",
            suggestion.name_2,
            suggestion.team_2 or "-",
            suggestion.similarity_score,
            suggestion.reason,
        )


def _log_progress(fraction: float, label: str) -> None:
    log.info("[%3.0f%%] %s", fraction * 100, label)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        season_id: UUID | None = None
        start: date | None = None
        end: date | None = None
        if parsed_args.command == "import":
            season_id = _parse_uuid(parsed_args.season_id)
        elif parsed_args.command == "season":
            start = _parse_iso_date(parsed_args.start) if parsed_args.start else None
            end = _parse_iso_date(parsed_args.end) if parsed_args.end else None
            if start and end and start > end:
                raise ValueError("Season start must be before end")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "preview":
            batch = preview_extractions(parsed_args.files)
            graph = batch.graph
            log.info(
                "Preview: %d divisions, %d teams, %d players, %d results, %d frames "
                "(%d files selected, %d failed)",
                len(graph.divisions),
                len(graph.teams),
                len(graph.players),
                len(graph.results),
                len(graph.frames),
                len(batch.selected_files),
                len(batch.failed_files),
            )
            for preview in batch.failed_files:
                log.warning("%s: %s", preview.file_name, "; ".join(preview.errors))
            _log_suggestions(graph.suggestions)
        elif parsed_args.command == "import" and season_id is not None:
            result = import_extractions(
                parsed_args.files,
                season_id=season_id,
                progress=_log_progress,
            )
            log.info("Import summary: %s", result.summary)
            log.info("%s", result.detailed_summary)
            _log_suggestions(result.merge_suggestions)
            for error in result.errors:
                log.error("%s", error)
            if not result.success:
                sys.exit(1)
        elif parsed_args.command == "season" and parsed_args.season_command == "create":
            season = create_season(name=parsed_args.name, start_date=start, end_date=end)
            log.info("Created season %s", season.id)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during import")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
