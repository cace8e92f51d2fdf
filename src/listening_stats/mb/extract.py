from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from listening_stats.types import SongRecord

UNKNOWN_GENRE = "Unknown"


def _artist_name(rec: Mapping[str, object]) -> str | None:
    phrase = rec.get("artist-credit-phrase")
    if isinstance(phrase, str) and phrase:
        return phrase

    ac = rec.get("artist-credit") or rec.get("artist")
    if isinstance(ac, list):
        # Join phrases (" & ", " feat. ") are plain strings between dicts
        for item in ac:
            if isinstance(item, dict):
                name = item.get("name")
                artist = item.get("artist")
                if not name and isinstance(artist, dict):
                    name = artist.get("name")
                if name:
                    return str(name)
    if isinstance(ac, dict):
        name = ac.get("name")
        return str(name) if name else None
    if isinstance(ac, str):
        return ac
    return None


def _tag_count(tag: Mapping[str, object]) -> int:
    val = tag.get("count")
    if isinstance(val, (int, float)):
        return int(val)
    if isinstance(val, str):
        try:
            return int(val)
        except ValueError:
            return 0
    return 0


def _top_genre(rec: Mapping[str, object]) -> str:
    """Most voted genre or tag name; first listed wins on equal votes."""
    best: str | None = None
    best_count = -1
    for key in ("genre-list", "tag-list", "genres", "tags"):
        lst = rec.get(key)
        if not isinstance(lst, list):
            continue
        for t in lst:
            if not isinstance(t, dict):
                continue
            name = t.get("name")
            if not name:
                continue
            count = _tag_count(t)
            if count > best_count:
                best, best_count = str(name), count
        if best:
            return best
    return UNKNOWN_GENRE


def _length_seconds(rec: Mapping[str, object]) -> float:
    val = rec.get("length")
    if isinstance(val, bool):
        return 0.0
    if isinstance(val, (int, float)):
        return max(0.0, val / 1000)
    if isinstance(val, str):
        try:
            return max(0.0, int(val) / 1000)
        except ValueError:
            return 0.0
    return 0.0


def song_record_from_recording(rec: Mapping[str, object]) -> SongRecord:
    """Map a MusicBrainz recording to the source `SongRecord` shape.

    Recordings without a length get a duration of 0 so they still count
    by plays; a missing title or artist raises `ValueError`.
    """
    rec_id = rec.get("id")
    title = rec.get("title")
    artist = _artist_name(rec)
    if not isinstance(rec_id, str) or not title or not artist:
        msg = f"MusicBrainz recording is missing id, title or artist: {rec_id!r}"
        raise ValueError(msg)

    return {
        "id": rec_id,
        "title": str(title),
        "artist": artist,
        "duration_seconds": _length_seconds(rec),
        "genre": _top_genre(rec),
    }
