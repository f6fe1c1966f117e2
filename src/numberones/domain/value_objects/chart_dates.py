"""Date helpers for chart lookups.

The chart provider prints chart weeks as "1 August 2020 - 7 August 2020" and
addresses chart pages by compact YYYYMMDD dates, while the cache is keyed by
zero-padded ISO dates. Everything here is pure - "today" is always passed in.
"""

import re
from collections.abc import Iterator
from datetime import date, timedelta

from numberones.domain.exceptions import ParseError

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")
_COMPACT_DATE_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")


def parse_long_date(value: str) -> str:
    """Convert a "D Month YYYY" date into "YYYY-M-D".

    Month names are the full English names and are matched case-sensitively.
    The output is NOT zero padded ("1 August 2020" -> "2020-8-1").

    Args:
        value: Date as printed on the chart page

    Returns:
        Date in the format YYYY-M-D

    Raises:
        ParseError: If the string is not three parts or the month is unknown
    """
    parts = [part.strip() for part in value.strip().split(" ") if part.strip()]
    if len(parts) != 3:
        raise ParseError(f"Expected 'D Month YYYY', got {value!r}")

    day, month_name, year = parts
    if month_name not in MONTHS:
        raise ParseError(f"Unrecognised month name {month_name!r} in {value!r}")

    return f"{year}-{MONTHS.index(month_name) + 1}-{day}"


def next_day(value: date) -> date:
    """Return the calendar day after ``value``."""
    return value + timedelta(days=1)


def pad2(value: int | str) -> str:
    """Zero-pad a month or day to two digits ("6", 6 and "06" all give "06")."""
    return f"0{int(value)}"[-2:]


def date_key(year: int | str, month: int | str, day: int | str) -> str:
    """Build the YYYY-MM-DD composite key used by the cache."""
    return f"{int(year):04d}-{pad2(month)}-{pad2(day)}"


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date from ``start`` to ``end`` inclusive.

    Yields nothing when ``start`` is after ``end``.
    """
    current = start
    while current <= end:
        yield current
        current = next_day(current)


# Hey future me, the old backfill endpoint took compact YYYYMMDD strings while the web
# form posts YYYY-MM-DD. We accept both here so callers don't have to care. Single-digit
# month/day are tolerated in the dashed form because users type "1990-6-5" all the time.
def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` or ``YYYYMMDD`` into a date.

    Raises:
        ParseError: If the string matches neither form or is not a real date
    """
    text = (value or "").strip()
    match = _ISO_DATE_RE.match(text) or _COMPACT_DATE_RE.match(text)
    if not match:
        raise ParseError(f"Expected YYYY-MM-DD or YYYYMMDD, got {value!r}")

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ParseError(f"Invalid calendar date {value!r}: {e}") from e


__all__ = [
    "MONTHS",
    "date_key",
    "iter_dates",
    "next_day",
    "pad2",
    "parse_iso_date",
    "parse_long_date",
]
