"""Resolve songs by MusicBrainz recording id."""

from __future__ import annotations

import contextlib
import importlib
import logging
from typing import TYPE_CHECKING, cast

from listening_stats import __version__
from listening_stats.config import DEFAULT_MUSICBRAINZ_CONTACT

from .extract import song_record_from_recording

if TYPE_CHECKING:
    from listening_stats.types import MusicBrainzClient, SongRecord

logger = logging.getLogger(__name__)

RECORDING_INCLUDES = ["artists", "tags"]


def _load_client() -> MusicBrainzClient:
    try:
        mb = importlib.import_module("musicbrainzngs")
    except ImportError as exc:  # pragma: no cover - runtime dependency
        msg = (
            "musicbrainzngs is required for MusicBrainz lookups."
            " Install with `pip install musicbrainzngs`"
        )
        raise RuntimeError(msg) from exc
    # importlib returns a module object; cast to our protocol for type-checking
    return cast("MusicBrainzClient", mb)


class MusicBrainzSongSource:
    """`SongSource` whose song ids are MusicBrainz recording MBIDs.

    Lookup failures propagate; enrichment turns them into `ResolutionError`.
    """

    def __init__(
        self,
        contact: str = DEFAULT_MUSICBRAINZ_CONTACT,
        client: MusicBrainzClient | None = None,
    ) -> None:
        self._mb = client or _load_client()
        with contextlib.suppress(Exception):
            self._mb.set_useragent("listening-stats", __version__, contact)

    def get_song(self, song_id: str) -> SongRecord:
        logger.info("Fetching MusicBrainz recording %s", song_id)
        full = self._mb.get_recording_by_id(song_id, includes=RECORDING_INCLUDES)
        rec = (full or {}).get("recording")
        if not isinstance(rec, dict):
            raise LookupError(f"MusicBrainz returned no recording for {song_id}")
        return song_record_from_recording(rec)
