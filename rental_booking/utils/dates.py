"""Date coercion helpers shared by the rule engine and the HTTP layer."""
from datetime import date, datetime

import pytz

from .constants import DATE_FMT


def parse_date(s: str) -> date:
    """Parse a strict 'YYYY-MM-DD' string; raise ValueError on bad input."""
    return datetime.strptime(s, DATE_FMT).date()


def as_date(x) -> date:
    """
    Coerce any date-like value to a calendar date.
    Supports:
      - date
      - datetime (time of day is dropped)
      - 'YYYY-MM-DD' and ISO strings with a 'T' or ' ' time part
    Dropping the time part floors the value to date granularity, so two
    timestamps on the same calendar day always compare equal.
    """
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    if isinstance(x, str):
        base = x.strip().replace("T", " ").split(" ", 1)[0]
        return date.fromisoformat(base)
    raise ValueError(f"Unsupported date: {x!r}")


def today_local(tz_name: str = "UTC") -> date:
    """Current calendar date in the given timezone."""
    tz = pytz.timezone(tz_name)
    return datetime.now(tz).date()
