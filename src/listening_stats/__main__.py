"""CLI entrypoint for listening-stats.

Provides a simple CLI using argparse. Diagnostics go through logging; the
report itself is printed so it can be redirected.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from .config import Settings
from .core import history_dataframe, history_summary
from .report import NO_DATA_MESSAGE, SessionState, StatsSession
from .sources import JsonDataSource
from .timeutil import resolve_zone
from .types import SongSource

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show INFO logging (enrichment progress, lookups)",
    )

    parser = argparse.ArgumentParser(prog="listening-stats")
    subparsers = parser.add_subparsers(dest="command", required=True)

    users_parser = subparsers.add_parser(
        "users", parents=[common], help="List user ids in a JSON data file"
    )
    users_parser.add_argument("data", help="Path to the JSON data file")

    stats_parser = subparsers.add_parser(
        "stats", parents=[common], help="Show listening statistics for one user"
    )
    stats_parser.add_argument("data", help="Path to the JSON data file")
    stats_parser.add_argument("user", help="User id to analyse")
    stats_parser.add_argument(
        "--tz",
        help=(
            "IANA time zone used for day and hour bucketing"
            " (default: $LISTENING_STATS_TZ or UTC)"
        ),
    )
    stats_parser.add_argument(
        "--workers",
        type=int,
        help="Concurrent song lookups (default: $LISTENING_STATS_WORKERS or 8)",
    )
    stats_parser.add_argument(
        "--musicbrainz",
        action="store_true",
        help=(
            "Resolve song ids as MusicBrainz recording ids instead of the"
            " data file's songs (requires musicbrainzngs)"
        ),
    )
    output = stats_parser.add_mutually_exclusive_group()
    output.add_argument(
        "--csv",
        action="store_true",
        help="Print the enriched history as CSV instead of the report",
    )
    output.add_argument(
        "--summary",
        action="store_true",
        help="Log play, track, artist and day counts instead of the report",
    )
    return parser


def _load_source(path: str) -> JsonDataSource | None:
    try:
        return JsonDataSource.from_path(path)
    except (OSError, ValueError) as exc:
        logger.error("Could not read data file %s: %s", path, exc)
        return None


def _handle_users(args: argparse.Namespace) -> int:
    source = _load_source(args.data)
    if source is None:
        return 1
    for user_id in source.get_user_ids():
        print(user_id)
    return 0


def _handle_stats(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    try:
        settings = Settings.from_env()
        tz = resolve_zone(args.tz or settings.tz_name)
    except ValueError as exc:
        parser.error(str(exc))
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be positive")
    workers = args.workers or settings.workers

    source = _load_source(args.data)
    if source is None:
        return 1
    songs: SongSource = source
    if args.musicbrainz:
        from .mb import MusicBrainzSongSource

        try:
            songs = MusicBrainzSongSource(contact=settings.musicbrainz_contact)
        except RuntimeError as exc:
            logger.error("%s", exc)
            return 1

    session = StatsSession(source, songs, tz=tz, max_workers=workers)
    state = session.select_user(args.user)

    if state is SessionState.ERROR:
        return 1
    if state is SessionState.EMPTY:
        print(NO_DATA_MESSAGE)
        return 0

    df = history_dataframe(session.history, tz)
    if args.csv:
        print(df.to_csv(index=False), end="")
        return 0
    if args.summary:
        logger.info("Summary: %s", history_summary(df))
        return 0

    for row in session.rows:
        print(f"{row.question}: {row.answer}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Default to quiet mode; enable INFO with --verbose or --summary
    logging.basicConfig(level=logging.WARNING)
    if args.verbose or getattr(args, "summary", False):
        logging.getLogger().setLevel(logging.INFO)

    if args.command == "users":
        return _handle_users(args)
    return _handle_stats(args, parser)


if __name__ == "__main__":
    raise SystemExit(main())
