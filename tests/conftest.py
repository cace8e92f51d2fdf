from __future__ import annotations

from collections.abc import Callable

import pytest

from listening_stats.timeutil import parse_timestamp
from listening_stats.types import EnrichedEvent, Song

EventFactory = Callable[..., EnrichedEvent]


def _make_event(
    timestamp: str | int,
    artist: str,
    name: str,
    duration: float = 180,
    genre: str = "Pop",
) -> EnrichedEvent:
    song = Song(
        id=f"{artist}/{name}",
        name=name,
        artist=artist,
        duration=duration,
        genre=genre,
    )
    return EnrichedEvent(timestamp=parse_timestamp(timestamp), song=song)


@pytest.fixture
def make_event() -> EventFactory:
    return _make_event


@pytest.fixture
def sample_document() -> dict[str, object]:
    """Small JSON data document with two users; user "2" has no plays."""
    return {
        "users": ["1", "2"],
        "listens": {
            "1": [
                {"song_id": "s1", "timestamp": "2023-01-06T18:00:00Z"},
                {"song_id": "s1", "timestamp": "2023-01-06T18:05:00Z"},
                {"song_id": "s2", "timestamp": "2023-01-06T18:10:00Z"},
                {"song_id": "s1", "timestamp": 1673085600000},  # 2023-01-07T10:00Z
                {"song_id": "s3", "timestamp": "2023-01-07T11:00:00Z"},
            ],
            "2": [],
        },
        "songs": {
            "s1": {
                "id": "s1",
                "title": "Song A",
                "artist": "Artist A",
                "duration_seconds": 100,
                "genre": "Rock",
            },
            "s2": {
                "id": "s2",
                "title": "Song B",
                "artist": "Artist B",
                "duration_seconds": 500,
                "genre": "Jazz",
            },
            "s3": {
                "id": "s3",
                "title": "Song C",
                "artist": "Artist A",
                "duration_seconds": 50,
                "genre": "Rock",
            },
        },
    }
