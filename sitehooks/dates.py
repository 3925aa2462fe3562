"""Lenient date parsing shared by the ranking and index hooks."""

from __future__ import annotations

import datetime as _dt
from email.utils import parsedate_to_datetime
from typing import Any

__all__ = ["EPOCH", "epoch_seconds", "iso8601_utc", "parse_datetime"]

EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)

_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


def _as_utc(dt: _dt.datetime) -> _dt.datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=_dt.timezone.utc)
    return dt.astimezone(_dt.timezone.utc)


def parse_datetime(value: Any) -> _dt.datetime | None:
    """Return ``value`` as an aware UTC datetime or ``None`` when unparseable.

    Accepts datetimes, dates, epoch numbers (milliseconds are detected) and the
    string layouts front matter tends to contain.  Naive values are taken to
    be UTC.
    """

    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, _dt.datetime):
        return _as_utc(value)
    if isinstance(value, _dt.date):
        return _dt.datetime(value.year, value.month, value.day, tzinfo=_dt.timezone.utc)

    if isinstance(value, (int, float)):
        timestamp = float(value)
        if timestamp > 1_000_000_000_000:  # likely milliseconds
            timestamp /= 1000.0
        try:
            return _dt.datetime.fromtimestamp(timestamp, tz=_dt.timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    text = str(value).strip()
    if not text:
        return None

    iso_candidate = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return _as_utc(_dt.datetime.fromisoformat(iso_candidate))
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return _as_utc(_dt.datetime.strptime(text, fmt))
        except ValueError:
            continue

    try:
        return _as_utc(parsedate_to_datetime(text))
    except (TypeError, ValueError, IndexError):
        return None


def epoch_seconds(value: Any) -> int:
    """Return whole seconds since the epoch; unparseable values count as 0."""

    dt = parse_datetime(value)
    if dt is None:
        return 0
    return int((dt - EPOCH).total_seconds())


def iso8601_utc(epoch: int) -> str:
    """Format ``epoch`` as ``YYYY-MM-DDTHH:MM:SSZ``."""

    return _dt.datetime.fromtimestamp(epoch, tz=_dt.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
