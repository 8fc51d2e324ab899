from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

# Formats seen in spreadsheet exports and device feeds, tried in order.
_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m-%d-%Y",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%a %b %d %Y",
    "%d-%b-%Y",
)


def parse_attendance_date(value: Any) -> Optional[date]:
    """Parse an attendance date, returning None when it is not a calendar date.

    Accepts date/datetime objects (what pandas hands over for real date cells),
    ISO 8601 dates and timestamps, and the formats listed in ``_DATE_FORMATS``.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def utc_now_iso() -> str:
    """Current UTC time as ISO 8601 string.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).isoformat()
