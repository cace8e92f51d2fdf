from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from listening_stats.errors import MalformedTimestamp
from listening_stats.timeutil import calendar_day, parse_timestamp, resolve_zone


def test_epoch_milliseconds() -> None:
    ts = parse_timestamp(1672567200000)
    assert ts == datetime(2023, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert ts.tzinfo is not None


def test_iso_with_z_suffix() -> None:
    ts = parse_timestamp("2023-01-01T10:00:00Z")
    assert ts == datetime(2023, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_iso_with_milliseconds_and_z() -> None:
    ts = parse_timestamp("2023-01-01T10:00:00.000Z")
    assert ts == datetime(2023, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_iso_with_fractional_seconds_and_z() -> None:
    ts = parse_timestamp("2023-01-01T10:00:00.5Z")
    assert ts == datetime(2023, 1, 1, 10, 0, 0, 500000, tzinfo=timezone.utc)


def test_iso_with_compact_offset() -> None:
    ts = parse_timestamp("2023-01-01T12:00:00+0000")
    assert ts == datetime(2023, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_iso_with_offset() -> None:
    ts = parse_timestamp("2023-01-01T10:00:00+02:00")
    assert ts == datetime(2023, 1, 1, 8, 0, tzinfo=timezone.utc)


def test_naive_iso_uses_default_zone() -> None:
    plus_one = timezone(timedelta(hours=1))
    assert parse_timestamp("2023-01-01T10:00:00") == datetime(
        2023, 1, 1, 10, 0, tzinfo=timezone.utc
    )
    assert parse_timestamp("2023-01-01T10:00:00", plus_one) == datetime(
        2023, 1, 1, 9, 0, tzinfo=timezone.utc
    )


@pytest.mark.parametrize(
    "value",
    ["", "   ", "yesterday", "2023-13-01T00:00:00Z", None, True, float("nan"), [1]],
)
def test_malformed_values_raise(value: object) -> None:
    with pytest.raises(MalformedTimestamp):
        parse_timestamp(value)


def test_malformed_timestamp_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_timestamp("not a date")


def test_calendar_day_in_zone() -> None:
    ts = datetime(2023, 1, 1, 23, 30, tzinfo=timezone.utc)
    assert calendar_day(ts) == date(2023, 1, 1)
    assert calendar_day(ts, timezone(timedelta(hours=2))) == date(2023, 1, 2)


@pytest.mark.parametrize("name", [None, "", "UTC", "utc", "Z"])
def test_resolve_zone_utc_names(name: str | None) -> None:
    assert resolve_zone(name) is timezone.utc


def test_resolve_zone_iana_name() -> None:
    tz = resolve_zone("America/New_York")
    ts = datetime(2023, 1, 7, 3, 0, tzinfo=timezone.utc)
    assert ts.astimezone(tz).hour == 22


def test_resolve_zone_unknown_name() -> None:
    with pytest.raises(ValueError, match="Unknown time zone"):
        resolve_zone("Mars/Olympus_Mons")
