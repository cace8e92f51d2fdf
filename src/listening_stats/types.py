"""Shared data types and structural protocols for listening-stats.

Two kinds of shapes live here:

- External shapes (`SongRecord`, `RawListenEvent`) as returned by a data
  source. They are plain TypedDicts because sources hand us decoded JSON or
  MusicBrainz responses, not objects we own.
- Core shapes (`Song`, `EnrichedEvent`, `Streak`) built by enrichment and the
  analysis functions. They are frozen dataclasses: an enriched history is
  built once per session and never mutated afterwards.

The protocols describe the minimal surface we call on collaborators so tests
can pass small fakes without subclassing anything.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, TypedDict


class SongRecord(TypedDict):
    """Song metadata as a data source returns it."""

    id: str
    title: str
    artist: str
    duration_seconds: int | float
    genre: str


class RawListenEvent(TypedDict):
    """One play as a data source returns it.

    ``timestamp`` is either epoch milliseconds or an ISO-8601 string.
    """

    song_id: str
    timestamp: int | float | str


@dataclass(frozen=True)
class Song:
    id: str
    name: str
    artist: str
    duration: int | float
    genre: str


@dataclass(frozen=True)
class EnrichedEvent:
    """A play joined with its song. ``timestamp`` is timezone-aware."""

    timestamp: datetime
    song: Song


@dataclass(frozen=True)
class Streak:
    """A run of consecutive plays of one track."""

    key: str
    length: int


class ListenSource(Protocol):
    def get_listen_events(self, user_id: str) -> Sequence[RawListenEvent] | None: ...


class SongSource(Protocol):
    def get_song(self, song_id: str) -> SongRecord: ...


class MusicBrainzClient(Protocol):
    """Minimal protocol for the subset of the musicbrainzngs API we use.

    Kept structural so modules can `cast(...)` the imported module for type
    checking at the call site, and tests can inject a fake module.
    """

    def set_useragent(self, app: str, version: str, contact: str) -> None: ...

    def get_recording_by_id(
        self,
        rec_id: str,
        includes: list[str] | None = None,
    ) -> dict[str, Any] | None: ...
