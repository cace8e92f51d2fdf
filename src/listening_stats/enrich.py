"""Join raw listen events with song metadata into an enriched history.

This is the only place that talks to data sources and the only place that
raises. Song lookups are independent reads, so they fan out over a thread
pool; results are paired back to events by position, not by completion order.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import tzinfo
from numbers import Real

from .errors import ResolutionError
from .timeutil import parse_timestamp
from .types import EnrichedEvent, ListenSource, RawListenEvent, Song, SongSource

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 8

_REQUIRED_FIELDS = ("id", "title", "artist", "duration_seconds", "genre")


def song_from_record(song_id: str, record: Mapping[str, object] | None) -> Song:
    """Standardise a source record (``title``, ``duration_seconds``) to a `Song`."""
    if not record or not isinstance(record, Mapping):
        raise ResolutionError(song_id, "lookup returned no data")

    missing = [f for f in _REQUIRED_FIELDS if record.get(f) is None]
    if missing:
        raise ResolutionError(song_id, f"record is missing {', '.join(missing)}")

    duration = record["duration_seconds"]
    if (
        isinstance(duration, bool)
        or not isinstance(duration, Real)
        or not math.isfinite(duration)
        or duration < 0
    ):
        raise ResolutionError(song_id, f"invalid duration {duration!r}")

    return Song(
        id=str(record["id"]),
        name=str(record["title"]),
        artist=str(record["artist"]),
        duration=duration,
        genre=str(record["genre"]),
    )


def _resolve(songs: SongSource, song_id: str) -> Song:
    try:
        record = songs.get_song(song_id)
    except ResolutionError:
        raise
    except Exception as exc:
        raise ResolutionError(song_id, str(exc) or type(exc).__name__) from exc
    return song_from_record(song_id, record)


def enrich_events(
    events: Sequence[RawListenEvent],
    songs: SongSource,
    *,
    max_workers: int | None = None,
    default_tz: tzinfo | None = None,
) -> list[EnrichedEvent]:
    """Enrich an already fetched list of raw events.

    Timestamps are parsed before any lookup is issued, so a malformed event
    fails fast with `MalformedTimestamp`. The first failing lookup, in input
    order, is raised as `ResolutionError`.
    """
    if not events:
        return []

    song_ids: list[str] = []
    timestamps = []
    for event in events:
        song_id = event.get("song_id")
        if song_id is None:
            raise ResolutionError(song_id, "listen event has no song_id")
        song_ids.append(song_id)
        timestamps.append(parse_timestamp(event.get("timestamp"), default_tz))

    workers = max(1, min(max_workers or DEFAULT_WORKERS, len(song_ids)))
    logger.debug("Resolving %d songs with %d workers", len(song_ids), workers)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        # map() yields in submission order and re-raises the first failure
        resolved = list(executor.map(lambda sid: _resolve(songs, sid), song_ids))

    return [
        EnrichedEvent(timestamp=ts, song=song)
        for ts, song in zip(timestamps, resolved)
    ]


def get_enriched_history(
    user_id: str,
    listens: ListenSource,
    songs: SongSource,
    *,
    max_workers: int | None = None,
    default_tz: tzinfo | None = None,
) -> list[EnrichedEvent]:
    """Fetch a user's listen events and enrich each with its song.

    Returns an empty list when the user has no history. The result has one
    entry per raw event, in the order the source returned them.
    """
    events = listens.get_listen_events(user_id)
    if not events:
        logger.info("No listen events for user %s", user_id)
        return []

    history = enrich_events(
        events, songs, max_workers=max_workers, default_tz=default_tz
    )
    logger.info("Enriched %d listen events for user %s", len(history), user_id)
    return history
