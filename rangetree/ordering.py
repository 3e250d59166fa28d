"""
Ordering predicates for the interval tree.

The tree only ever asks "is a strictly less than b?". Two keys are equivalent
when neither is less than the other. The predicate must be a strict weak
order; this is not checked.
"""

from datetime import datetime
from typing import Any, Callable, Optional, TypeVar

from .timezone_utils import get_local_timezone, to_utc_datetime

K = TypeVar('K')

LessThan = Callable[[K, K], bool]


def equivalent(less: LessThan, a: K, b: K) -> bool:
    """True if neither key orders before the other."""
    return not less(a, b) and not less(b, a)


def natural_less(a: Any, b: Any) -> bool:
    return a < b


def reverse_less(a: Any, b: Any) -> bool:
    """Inverted natural order; search output comes back descending."""
    return b < a


def key_less(key: Callable[[K], Any]) -> LessThan:
    """Build a predicate that orders keys by ``key(k)``, like ``sorted(key=...)``."""
    def _less(a: K, b: K) -> bool:
        return key(a) < key(b)
    return _less


def datetime_less(timezone_name: Optional[str] = None) -> LessThan:
    """
    Build a predicate that orders datetimes by the instant they denote.

    Naive datetimes are read in ``timezone_name``, or in the timezone
    configured when the predicate is built, so naive and aware keys can live
    in the same tree. The zone is fixed here; later ``set_timezone`` calls
    do not reorder an existing tree.

    Raises:
        ValueError: if pytz does not know the timezone name.
    """
    local_tz = get_local_timezone(timezone_name)

    def _less(a: datetime, b: datetime) -> bool:
        return to_utc_datetime(a, local_tz) < to_utc_datetime(b, local_tz)
    return _less
