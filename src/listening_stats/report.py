"""Turn an enriched history into displayable question/answer rows.

`build_report` decides nothing about enrichment; it runs each analysis
function and drops rows whose answer is empty. `StatsSession` drives a
single user selection through ``idle -> loading -> displaying | empty |
error`` so a front end only has to render the current state.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import tzinfo
from enum import Enum
from typing import NamedTuple

from . import analysis
from .enrich import get_enriched_history
from .errors import ListeningStatsError
from .types import EnrichedEvent, ListenSource, SongSource

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "This user has no listening data."


class ReportRow(NamedTuple):
    question: str
    answer: str


def _genre_title(count: int) -> str:
    return f"Top {count} Genres" if count > 1 else "Top Genre"


def build_report(
    history: Sequence[EnrichedEvent], tz: tzinfo | None = None
) -> list[ReportRow]:
    """Run every statistic over ``history``; omit rows with no answer."""
    rows: list[ReportRow] = []

    def add(question: str, answer: str | Sequence[str] | None) -> None:
        if not answer:
            return
        text = answer if isinstance(answer, str) else ", ".join(answer)
        rows.append(ReportRow(question, text))

    add("Most Listened Song (by count)", analysis.most_listened_track_by_count(history))
    add("Most Listened Song (by time)", analysis.most_listened_track_by_time(history))
    add(
        "Most Listened Artist (by count)",
        analysis.most_listened_artist_by_count(history),
    )
    add("Most Listened Artist (by time)", analysis.most_listened_artist_by_time(history))

    friday = analysis.filter_weekend_late_night(history, tz)
    if friday:
        add("Friday Night Song (by count)", analysis.most_listened_track_by_count(friday))
        add("Friday Night Song (by time)", analysis.most_listened_track_by_time(friday))

    streak = analysis.longest_streak(history)
    if streak:
        add("Longest Streak Song", f"{streak.key} (length: {streak.length})")

    add("Every Day Song", analysis.every_day_tracks(history, tz))

    genres = analysis.top_genres(history)
    if genres:
        add(_genre_title(len(genres)), genres)

    return rows


class SessionState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    DISPLAYING = "displaying"
    EMPTY = "empty"
    ERROR = "error"


class StatsSession:
    """Explicit state holder for one viewer selecting users one at a time."""

    def __init__(
        self,
        listens: ListenSource,
        songs: SongSource,
        *,
        tz: tzinfo | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._listens = listens
        self._songs = songs
        self._tz = tz
        self._max_workers = max_workers
        self.clear()

    def clear(self) -> None:
        self.state = SessionState.IDLE
        self.user_id: str | None = None
        self.history: list[EnrichedEvent] = []
        self.rows: list[ReportRow] = []
        self.error: str | None = None

    def select_user(self, user_id: str) -> SessionState:
        """Load ``user_id`` and move to displaying, empty or error."""
        self.clear()
        self.user_id = user_id
        self.state = SessionState.LOADING

        try:
            history = get_enriched_history(
                user_id,
                self._listens,
                self._songs,
                max_workers=self._max_workers,
                default_tz=self._tz,
            )
        except ListeningStatsError as exc:
            logger.error("Failed to load history for user %s: %s", user_id, exc)
            self.error = str(exc)
            self.state = SessionState.ERROR
            return self.state

        self.history = history
        if not history:
            self.state = SessionState.EMPTY
            return self.state

        self.rows = build_report(history, self._tz)
        self.state = SessionState.DISPLAYING
        return self.state
