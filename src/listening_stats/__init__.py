"""listening-stats package.

Exports the enrichment entry point, the analysis functions and the package
`__version__`.
"""

from importlib.metadata import version

# Default version fallback; if this package isn't installed as a distribution, we
# still want a usable `__version__` attribute during development.
try:
    __version__ = version("listening-stats")
except Exception:  # pragma: no cover - import-time fallback
    __version__ = "0.1.0"

from .analysis import (
    every_day_tracks,
    filter_weekend_late_night,
    longest_streak,
    most_listened_artist_by_count,
    most_listened_artist_by_time,
    most_listened_track_by_count,
    most_listened_track_by_time,
    top_by_key,
    top_genres,
    track_key,
)
from .enrich import get_enriched_history
from .errors import ListeningStatsError, MalformedTimestamp, ResolutionError
from .types import EnrichedEvent, Song, Streak

__all__ = [
    "EnrichedEvent",
    "ListeningStatsError",
    "MalformedTimestamp",
    "ResolutionError",
    "Song",
    "Streak",
    "__version__",
    "every_day_tracks",
    "filter_weekend_late_night",
    "get_enriched_history",
    "longest_streak",
    "most_listened_artist_by_count",
    "most_listened_artist_by_time",
    "most_listened_track_by_count",
    "most_listened_track_by_time",
    "top_by_key",
    "top_genres",
    "track_key",
]
