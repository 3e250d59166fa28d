"""
Timezone utilities for datetime keys.

Naive and aware datetimes cannot be compared with each other in Python, so
datetime keys are brought to UTC before the tree compares them. Naive values
are taken to be in a local timezone, by default the configured one.
"""

from datetime import datetime
from typing import Optional
import pytz


# Default timezone - can be overridden by config
_local_timezone_name: str = "UTC"


def set_timezone(timezone_name: str):
    """
    Set the default timezone used to interpret naive datetimes.

    Raises:
        ValueError: if pytz does not know the timezone name.
    """
    global _local_timezone_name
    get_local_timezone(timezone_name)
    _local_timezone_name = timezone_name


def get_timezone_name() -> str:
    return _local_timezone_name


def get_local_timezone(timezone_name: Optional[str] = None):
    """
    Get a timezone as a pytz timezone object.

    Args:
        timezone_name: A pytz name; the configured local timezone if omitted.

    Raises:
        ValueError: if pytz does not know the timezone name.
    """
    if timezone_name is None:
        timezone_name = _local_timezone_name
    if not isinstance(timezone_name, str):
        raise ValueError(f"Timezone must be a string, got {timezone_name!r}")
    try:
        return pytz.timezone(timezone_name)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone: {timezone_name}")


def to_utc_datetime(dt: datetime, local_tz=None) -> datetime:
    """
    Convert a datetime to an aware datetime in UTC.

    Args:
        dt: A naive datetime (interpreted in the local timezone) or an
            aware datetime in any timezone.
        local_tz: pytz timezone for naive input; the configured local
            timezone if omitted.

    Returns:
        A timezone-aware datetime in UTC.
    """
    if dt.tzinfo is None:
        if local_tz is None:
            local_tz = get_local_timezone()
        return local_tz.localize(dt).astimezone(pytz.UTC)
    return dt.astimezone(pytz.UTC)
