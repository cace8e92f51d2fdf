"""Public exports for MusicBrainz helpers."""

from __future__ import annotations

from .client import MusicBrainzSongSource
from .extract import song_record_from_recording

__all__ = ["MusicBrainzSongSource", "song_record_from_recording"]
