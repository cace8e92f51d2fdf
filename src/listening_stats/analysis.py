"""Statistics over an enriched listening history.

Every function here is pure: it reads a sequence of `EnrichedEvent` and
returns a value, never raising for empty input. Callers compose them, e.g.
filter with `filter_weekend_late_night` and then ask
`most_listened_track_by_count` of the subset.

Track identity is the pair (artist, name), rendered as ``"<artist> - <name>"``
by `track_key`. A bare song name is not enough: two artists can release
tracks with the same title and they must not share a bucket.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Sequence
from datetime import date, tzinfo
from typing import TypeVar

from .timeutil import calendar_day, to_zone
from .types import EnrichedEvent, Streak

K = TypeVar("K", bound=Hashable)

FRIDAY = 4
SATURDAY = 5
FRIDAY_NIGHT_START_HOUR = 17
SATURDAY_NIGHT_END_HOUR = 4

DEFAULT_GENRE_LIMIT = 3


def track_key(event: EnrichedEvent) -> str:
    return f"{event.song.artist} - {event.song.name}"


def artist_key(event: EnrichedEvent) -> str:
    return event.song.artist


def _one(_event: EnrichedEvent) -> int:
    return 1


def _duration(event: EnrichedEvent) -> int | float:
    return event.song.duration


def top_by_key(
    events: Iterable[EnrichedEvent],
    key_of: Callable[[EnrichedEvent], K],
    value_of: Callable[[EnrichedEvent], int | float] = _one,
) -> K | None:
    """Return the key whose summed ``value_of`` is largest, or None if empty.

    Ties go to the key seen first: totals are scanned in order of first
    appearance and a later key only wins when its total is strictly greater.
    """
    totals: dict[K, int | float] = {}
    for event in events:
        key = key_of(event)
        totals[key] = totals.get(key, 0) + value_of(event)

    best: K | None = None
    best_total: int | float | None = None
    for key, total in totals.items():
        if best_total is None or total > best_total:
            best, best_total = key, total
    return best


def most_listened_track_by_count(events: Sequence[EnrichedEvent]) -> str | None:
    return top_by_key(events, track_key)


def most_listened_track_by_time(events: Sequence[EnrichedEvent]) -> str | None:
    return top_by_key(events, track_key, _duration)


def most_listened_artist_by_count(events: Sequence[EnrichedEvent]) -> str | None:
    return top_by_key(events, artist_key)


def most_listened_artist_by_time(events: Sequence[EnrichedEvent]) -> str | None:
    return top_by_key(events, artist_key, _duration)


def is_weekend_late_night(event: EnrichedEvent, tz: tzinfo | None = None) -> bool:
    """Friday from 17:00, or Saturday before 04:00, in ``tz``."""
    local = to_zone(event.timestamp, tz)
    day = local.weekday()
    if day == FRIDAY:
        return local.hour >= FRIDAY_NIGHT_START_HOUR
    if day == SATURDAY:
        return local.hour < SATURDAY_NIGHT_END_HOUR
    return False


def filter_weekend_late_night(
    events: Sequence[EnrichedEvent], tz: tzinfo | None = None
) -> list[EnrichedEvent]:
    return [e for e in events if is_weekend_late_night(e, tz)]


def longest_streak(events: Sequence[EnrichedEvent]) -> Streak | None:
    """Longest run of consecutive plays of the same track.

    Only a run of two or more counts as a streak. When two runs are equally
    long the earlier one is kept.
    """
    best: Streak | None = None
    current_key: str | None = None
    current_length = 0

    for event in events:
        key = track_key(event)
        if key == current_key:
            current_length += 1
        else:
            current_key, current_length = key, 1

        if best is None or current_length > best.length:
            best = Streak(key=key, length=current_length)

    if best is None or best.length < 2:
        return None
    return best


def every_day_tracks(
    events: Sequence[EnrichedEvent], tz: tzinfo | None = None
) -> list[str]:
    """Tracks played on every calendar day that has any plays at all.

    Results keep the order in which each track first appears.
    """
    all_days: set[date] = set()
    days_by_track: dict[str, set[date]] = {}

    for event in events:
        day = calendar_day(event.timestamp, tz)
        all_days.add(day)
        days_by_track.setdefault(track_key(event), set()).add(day)

    return [key for key, days in days_by_track.items() if days == all_days]


def top_genres(
    events: Sequence[EnrichedEvent], limit: int = DEFAULT_GENRE_LIMIT
) -> list[str]:
    """Most played genres, by play count, at most ``limit`` of them.

    Genres with equal counts keep the order in which they were first played
    (``sorted`` is stable and the counts dict preserves insertion order).
    """
    if limit <= 0:
        return []

    counts: dict[str, int] = {}
    for event in events:
        genre = event.song.genre
        counts[genre] = counts.get(genre, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [genre for genre, _count in ranked[:limit]]
