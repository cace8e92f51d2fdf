"""Exceptions raised at the enrichment boundary.

Analysis functions never raise for empty or degenerate input; everything that
can go wrong happens while turning raw events into an enriched history.
"""

from __future__ import annotations


class ListeningStatsError(Exception):
    """Base class for listening-stats errors."""


class ResolutionError(ListeningStatsError):
    """A song lookup failed or returned unusable data."""

    def __init__(self, song_id: object, reason: str) -> None:
        self.song_id = song_id
        self.reason = reason
        super().__init__(f"Could not resolve song {song_id!r}: {reason}")


class MalformedTimestamp(ListeningStatsError, ValueError):
    """A listen timestamp cannot be turned into a calendar day and hour."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Malformed listen timestamp: {value!r}")
