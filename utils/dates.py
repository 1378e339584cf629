"""
utils/dates.py
--------------
Conversions between Python dates and the values drivers hand back
for SQL DATE columns.
"""

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime, str]


def to_sql_date(value: Optional[DateLike]) -> Optional[date]:
    """
    Normalize a value for binding to a DATE parameter.

    A datetime is truncated to its calendar date and an ISO string is
    parsed, so the driver always receives a native ``date`` (or None).
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def from_sql_date(value) -> Optional[date]:
    """Map a DATE column value (date, datetime, ISO text or NULL) to an optional date."""
    if value is None or value == "":
        return None
    if isinstance(value, bytes):
        value = value.decode()
    return to_sql_date(value)
