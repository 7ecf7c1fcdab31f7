from __future__ import annotations

import calendar
import typing as tp
from datetime import datetime, timezone
from email.utils import formatdate, parsedate_tz


def parse_date(date: str) -> tp.Optional[float]:
    """
    Convert an HTTP-date or ISO 8601 string into a POSIX timestamp.

    RFC 1123, RFC 850 and asctime formats are tried first. ISO 8601 values
    are accepted as a fallback; a trailing ``Z`` means UTC and values
    without an offset are read as UTC.

    Returns None when the value can't be parsed.

    Examples:
        >>> parse_date("Sat, 01 Jan 2000 00:00:00 GMT")
        946684800
        >>> parse_date("2000-01-01T01:00:00Z")
        946688400.0
        >>> parse_date("foo") is None
        True
    """
    date = date.strip()
    if not date:
        return None

    try:
        parsed = parsedate_tz(date)
    except (TypeError, ValueError, IndexError):
        parsed = None

    if parsed is not None:
        try:
            timestamp = calendar.timegm(parsed[:6])
        except (ValueError, OverflowError):
            return None
        offset = parsed[9]
        return timestamp - offset if offset is not None else timestamp

    iso_date = date[:-1] + "+00:00" if date.endswith(("Z", "z")) else date
    try:
        moment = datetime.fromisoformat(iso_date)
    except ValueError:
        return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    try:
        return moment.timestamp()
    except (ValueError, OverflowError):
        return None


def generate_http_date(timestamp: tp.Optional[float] = None) -> str:
    """
    Generate a value for Date or Last-Modified headers.
    Returns date in RFC 1123 format (required by HTTP/1.1).

    Example output: 'Sun, 26 Oct 2025 12:34:56 GMT'
    """
    return formatdate(timeval=timestamp, localtime=False, usegmt=True)
