"""Timestamp parsing and calendar bucketing.

Listen events arrive with either epoch milliseconds or an ISO-8601 string.
Both are parsed once, during enrichment, into a timezone-aware `datetime`.
Every later question about "which day" or "which hour" goes through
`to_zone`, so the Friday-night filter and the every-day coverage check
always agree on where a day starts.

The zone defaults to UTC. Pass a `tzinfo` (see `resolve_zone`) to bucket in
another zone; use the same one for every analysis call of a session.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import MalformedTimestamp

UTC_NAMES = frozenset({"utc", "z", "gmt"})


def resolve_zone(name: str | None) -> tzinfo:
    """Return a tzinfo for an IANA zone name; empty or UTC-like names give UTC."""
    if not name or name.strip().lower() in UTC_NAMES:
        return timezone.utc
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {name!r}") from exc


def parse_timestamp(value: object, default_tz: tzinfo | None = None) -> datetime:
    """Parse epoch milliseconds or an ISO-8601 string into an aware datetime.

    ISO strings without an offset are read as wall-clock time in
    ``default_tz`` (UTC when omitted). Raises `MalformedTimestamp` for
    anything else, including booleans, NaN and empty strings.
    """
    zone = default_tz or timezone.utc

    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=zone)

    if isinstance(value, bool):
        raise MalformedTimestamp(value)

    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise MalformedTimestamp(value)
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise MalformedTimestamp(value) from exc

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise MalformedTimestamp(value)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise MalformedTimestamp(value) from exc
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=zone)

    raise MalformedTimestamp(value)


def to_zone(ts: datetime, tz: tzinfo | None = None) -> datetime:
    return ts.astimezone(tz or timezone.utc)


def calendar_day(ts: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of ``ts`` as seen in ``tz``."""
    return to_zone(ts, tz).date()
