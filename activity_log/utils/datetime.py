"""Helpers for working with timezone-aware UTC datetimes."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Final

_ISO_INSTANT: Final[re.Pattern[str]] = re.compile(
    r"^(\d{4}-\d{2}-\d{2})T(\d{2}:\d{2}:\d{2})(?:\.(\d{1,9}))?([zZ]|[+-]\d{2}:\d{2})?$"
)


def now_utc() -> datetime:
    """Return the current time in UTC, truncated to milliseconds."""

    return truncate_to_milliseconds(datetime.now(tz=timezone.utc))


def truncate_to_milliseconds(value: datetime) -> datetime:
    """Drop sub-millisecond precision from ``value``.

    Activity timestamps travel as ISO strings with millisecond precision, so
    keeping the same precision in memory makes round trips exact.
    """

    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` so it is expressed in UTC.

    Naive datetimes are assumed to already be in UTC.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_utc_naive(value: datetime | None) -> datetime | None:
    """Return ``value`` converted to UTC but without ``tzinfo``.

    Not every database keeps the offset of ``DateTime`` columns (SQLite drops
    it), so values are stored as naive UTC and made aware again when read.
    """

    localized = ensure_utc(value)
    if localized is None:
        return None
    return localized.replace(tzinfo=None)


def parse_iso_instant(raw: str) -> datetime:
    """Parse an ISO-8601 date-time string into an aware UTC datetime.

    Only the extended ``YYYY-MM-DDTHH:MM:SS[.fraction][Z|±HH:MM]`` form is
    accepted; date-only strings are rejected. Strings without an offset are
    taken as UTC. Raises ``ValueError`` for anything else.
    """

    match = _ISO_INSTANT.match(raw.strip())
    if match is None:
        raise ValueError(f"{raw!r} is not an ISO-8601 date-time")
    date_part, time_part, fraction, offset = match.groups()
    # ``fromisoformat`` before Python 3.11 only reads 3 or 6 fraction digits.
    micros = (fraction or "").ljust(6, "0")[:6]
    if offset is None or offset in ("Z", "z"):
        offset = "+00:00"
    parsed = datetime.fromisoformat(f"{date_part}T{time_part}.{micros}{offset}")
    return ensure_utc(parsed)  # type: ignore[return-value]


def format_iso_instant(value: datetime) -> str:
    """Render ``value`` as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""

    utc_value = ensure_utc(value)
    assert utc_value is not None
    return utc_value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


__all__ = [
    "ensure_utc",
    "ensure_utc_naive",
    "format_iso_instant",
    "now_utc",
    "parse_iso_instant",
    "truncate_to_milliseconds",
]
