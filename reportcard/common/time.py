"""Common time utilities."""

from __future__ import annotations

import datetime as dt


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def unix_timestamp(moment: dt.datetime) -> int:
    """Return whole seconds since the epoch for an aware datetime."""
    return int(moment.timestamp())
