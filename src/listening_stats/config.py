"""Runtime settings read from environment variables.

CLI flags override these; library callers can build a `Settings` directly.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import tzinfo

from .timeutil import resolve_zone

DEFAULT_TZ = "UTC"
DEFAULT_MUSICBRAINZ_CONTACT = "listening-stats@example.com"


@dataclass(frozen=True)
class Settings:
    tz_name: str = DEFAULT_TZ
    workers: int | None = None
    musicbrainz_contact: str = DEFAULT_MUSICBRAINZ_CONTACT

    @property
    def tz(self) -> tzinfo:
        return resolve_zone(self.tz_name)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        workers_raw = env.get("LISTENING_STATS_WORKERS", "").strip()
        workers: int | None = None
        if workers_raw:
            try:
                workers = int(workers_raw)
            except ValueError as exc:
                msg = f"LISTENING_STATS_WORKERS must be an integer, got {workers_raw!r}"
                raise ValueError(msg) from exc
            if workers < 1:
                msg = f"LISTENING_STATS_WORKERS must be positive, got {workers}"
                raise ValueError(msg)

        return cls(
            tz_name=env.get("LISTENING_STATS_TZ", DEFAULT_TZ) or DEFAULT_TZ,
            workers=workers,
            musicbrainz_contact=env.get(
                "MUSICBRAINZ_CONTACT", DEFAULT_MUSICBRAINZ_CONTACT
            ),
        )
