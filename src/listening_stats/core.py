"""Tabular views of an enriched history.

The analysis functions work on plain sequences; these helpers exist for
output (CSV, tables) and quick summaries in the CLI.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import tzinfo
from typing import TypedDict

import pandas as pd

from .analysis import track_key
from .timeutil import calendar_day, to_zone
from .types import EnrichedEvent

HISTORY_COLUMNS = [
    "timestamp",
    "day",
    "track",
    "artist",
    "name",
    "duration",
    "genre",
]


def history_dataframe(
    history: Sequence[EnrichedEvent], tz: tzinfo | None = None
) -> pd.DataFrame:
    """Return one row per play, in play order, with times shown in ``tz``."""
    rows = [
        {
            "timestamp": to_zone(e.timestamp, tz).isoformat(),
            "day": calendar_day(e.timestamp, tz).isoformat(),
            "track": track_key(e),
            "artist": e.song.artist,
            "name": e.song.name,
            "duration": e.song.duration,
            "genre": e.song.genre,
        }
        for e in history
    ]
    return pd.DataFrame(rows, columns=HISTORY_COLUMNS)


class HistorySummary(TypedDict):
    """Small typed dict describing the summary returned by `history_summary`."""

    plays: int
    tracks: int
    artists: int
    days: int
    total_duration: float


def history_summary(df: pd.DataFrame) -> HistorySummary:
    """Return play, distinct-track, artist and day counts plus total duration."""
    return {
        "plays": len(df),
        "tracks": int(df["track"].nunique()),
        "artists": int(df["artist"].nunique()),
        "days": int(df["day"].nunique()),
        "total_duration": float(df["duration"].sum()),
    }
