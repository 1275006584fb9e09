import re
from datetime import datetime, timezone
from typing import Any

from .exception import InvalidDateError

CREATED_AT_PATTERN = "yyyy-MM-dd'T'HH:mm:ss.SSS'Z'"

_CREATED_AT_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]{3}Z")
_STRPTIME_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def parse_created_at(value: Any) -> datetime:
    """Parse a profile timestamp such as ``2014-07-06T18:33:49.005Z`` into an aware UTC datetime."""
    if not isinstance(value, str) or not _CREATED_AT_RE.fullmatch(value):
        raise InvalidDateError(value, CREATED_AT_PATTERN)
    try:
        parsed = datetime.strptime(value, _STRPTIME_FORMAT)
    except ValueError as e:
        # Pattern matched but the calendar values are out of range, e.g. month 13
        raise InvalidDateError(value, CREATED_AT_PATTERN) from e
    return parsed.replace(tzinfo=timezone.utc)


def format_created_at(value: datetime) -> str:
    """Format a datetime with the profile timestamp pattern. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}T"
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}.{value.microsecond // 1000:03d}Z"
    )
