"""A data source backed by a single JSON document.

Expected shape::

    {
      "users": ["1", "2"],
      "listens": {"1": [{"song_id": "s1", "timestamp": "2023-01-01T10:00:00Z"}]},
      "songs": {"s1": {"id": "s1", "title": "...", "artist": "...",
                       "duration_seconds": 180, "genre": "Pop"}}
    }

``users`` is optional; when absent the keys of ``listens`` are used.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, cast

from listening_stats.types import RawListenEvent, SongRecord

logger = logging.getLogger(__name__)


class JsonDataSource:
    """Serve users, listen events and songs from an in-memory document."""

    def __init__(self, document: Mapping[str, Any]) -> None:
        listens = document.get("listens") or {}
        songs = document.get("songs") or {}
        if not isinstance(listens, Mapping) or not isinstance(songs, Mapping):
            raise ValueError("'listens' and 'songs' must be JSON objects")

        self._listens: dict[str, list[RawListenEvent]] = {
            str(k): list(v or []) for k, v in listens.items()
        }
        self._songs: dict[str, SongRecord] = {
            str(k): cast("SongRecord", v) for k, v in songs.items()
        }
        users = document.get("users")
        if users is None:
            users = list(self._listens)
        self._users = [str(u) for u in users]

    @classmethod
    def from_path(cls, path: str | Path) -> JsonDataSource:
        p = Path(path)
        with p.open("r", encoding="utf8") as fh:
            document = json.load(fh)
        if not isinstance(document, dict):
            raise ValueError(f"{p} does not contain a JSON object")
        logger.info("Loaded data source from %s", str(p))
        return cls(document)

    def get_user_ids(self) -> list[str]:
        return list(self._users)

    def get_listen_events(self, user_id: str) -> list[RawListenEvent]:
        """Return the user's events in stored order; unknown users have none."""
        return list(self._listens.get(str(user_id), []))

    def get_song(self, song_id: str) -> SongRecord:
        try:
            return self._songs[str(song_id)]
        except KeyError:
            raise KeyError(f"Unknown song id: {song_id}") from None
