"""Tolerant date parsing for feed timestamps."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

from dateutil import parser as dateutil_parser
from dateutil import tz

logger = logging.getLogger(__name__)

# RFC 822 zone names that dateutil does not resolve on its own.
_ZONE_OFFSETS = {
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}
TZINFOS = {name: tz.tzoffset(name, hours * 3600) for name, hours in _ZONE_OFFSETS.items()}


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_date(value: Optional[str], now: Optional[datetime] = None) -> datetime:
    """Parse a feed date string into an aware UTC datetime.

    Tries a generic parse first and the RFC 2822 form used by most RSS feeds
    second. Empty or unparseable values resolve to ``now``.
    """
    fallback = now or datetime.now(timezone.utc)
    if not value or not value.strip():
        return fallback

    text = value.strip()
    try:
        return _as_utc(dateutil_parser.parse(text, tzinfos=TZINFOS))
    except (ValueError, OverflowError, TypeError):
        pass

    try:
        return _as_utc(parsedate_to_datetime(text))
    except (ValueError, OverflowError, TypeError, IndexError, AttributeError):
        logger.debug("Unparseable feed date %r; using fetch time", text)

    return fallback
