from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from dateutil import parser as dtparser


HOUR_KEY_FORMAT = "%Y-%m-%d %H:00"


def parse_ts(ts: str) -> datetime:
    """Parse ISO-8601 timestamps, keeping whatever offset the string carries."""
    return dtparser.isoparse(ts)


def safe_parse_ts(ts: Any) -> Optional[datetime]:
    if not ts or not isinstance(ts, str):
        return None
    try:
        return parse_ts(ts)
    except (ValueError, OverflowError):
        return None


def hour_key(dt: datetime) -> str:
    """Render the start of dt's hour as `YYYY-MM-DD HH:00` in dt's own offset.

    Built field by field: strftime does not zero-pad years below 1000 on glibc.
    """
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d} {dt.hour:02d}:00"


def parse_hour_key(key: str) -> datetime:
    return datetime.strptime(key, HOUR_KEY_FORMAT)
