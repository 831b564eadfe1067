"""Date/time parsing and formatting for task fields.

Task timestamps are naive datetimes (no timezone). Users type them in one
of several numeric date layouts with an optional 24h time token; they are
always displayed and stored in a single fixed layout, ``Dec 25 2023 14:00``.

A day past the end of its month (``2023-02-30``) resolves to the month's
last day. Months outside 1-12 and days outside 1-31 are rejected.
"""

import calendar
import re
from datetime import date, datetime, time
from typing import List, Optional, Tuple

from ..exceptions import DateFormatError


YEAR = r"(?P<year>[0-9]{4})"
MONTH = r"(?P<month>[0-9]{2})"
DAY = r"(?P<day>[0-9]{2})"

# Tried in order; first match wins, so 12/12/2012 resolves as dd/MM/yyyy.
DATE_PATTERNS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("yyyy-MM-dd", re.compile(rf"^{YEAR}-{MONTH}-{DAY}$")),
    ("yyyy/MM/dd", re.compile(rf"^{YEAR}/{MONTH}/{DAY}$")),
    ("dd-MM-yyyy", re.compile(rf"^{DAY}-{MONTH}-{YEAR}$")),
    ("dd/MM/yyyy", re.compile(rf"^{DAY}/{MONTH}/{YEAR}$")),
    ("MM-dd-yyyy", re.compile(rf"^{MONTH}-{DAY}-{YEAR}$")),
    ("MM/dd/yyyy", re.compile(rf"^{MONTH}/{DAY}/{YEAR}$")),
]

TIME_RE = re.compile(r"^[0-9]{3,4}$")

# Fixed English abbreviations so output never depends on the process locale.
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DISPLAY_RE = re.compile(
    r"^(?P<month>[A-Z][a-z]{2}) (?P<day>[0-9]{2}) (?P<year>[0-9]{4}) "
    r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})$"
)

TIME_HINT = "Use 24hr format like 1437 for 14:37"


def _split_date_and_time(text: str) -> Tuple[str, Optional[str]]:
    """Split trimmed input into a date token and an optional time token."""
    parts = text.split()
    if len(parts) == 1:
        return parts[0], None
    return " ".join(parts[:-1]), parts[-1]


def parse_time_token(token: str) -> time:
    """Decode a 3 or 4 digit 24h time token.

    ``900`` is 09:00 and ``1437`` is 14:37.

    Raises:
        DateFormatError: If the token is not 3-4 digits or is out of range.
    """
    if not TIME_RE.match(token):
        raise DateFormatError(f"Invalid time format: {token}. {TIME_HINT}")

    split_at = 1 if len(token) == 3 else 2
    try:
        return time(int(token[:split_at]), int(token[split_at:]))
    except ValueError as e:
        raise DateFormatError(f"Invalid time format: {token}. {TIME_HINT}") from e


def resolve_date(year: int, month: int, day: int) -> date:
    """Build a date, moving a day past the end of the month to its last day.

    ``resolve_date(2023, 2, 30)`` is Feb 28 2023.

    Raises:
        ValueError: If month is not 1-12, day is not 1-31 or year is 0.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    if not 1 <= day <= 31:
        raise ValueError(f"day must be in 1..31, got {day}")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def parse_date_token(token: str) -> date:
    """Parse a date token against the accepted patterns in order.

    Raises:
        DateFormatError: If no pattern accepts the token.
    """
    for _name, shape in DATE_PATTERNS:
        m = shape.match(token)
        if not m:
            continue
        try:
            return resolve_date(
                int(m.group("year")), int(m.group("month")), int(m.group("day"))
            )
        except ValueError:
            continue

    raise DateFormatError(
        f"Invalid date format: {token}. Please use formats like yyyy-mm-dd or dd/mm/yyyy"
    )


def parse_datetime(raw: Optional[str]) -> datetime:
    """Parse flexible user input into a timestamp.

    Accepts ``<date> [<time>]`` where date is one of the layouts in
    ``DATE_PATTERNS`` and time is a 3-4 digit 24h token. Missing time
    defaults to 00:00.

    Args:
        raw: Text typed by the user

    Returns:
        Naive datetime with minute precision

    Raises:
        DateFormatError: If the input is blank, or either token is invalid
    """
    if raw is None or not raw.strip():
        raise DateFormatError("Empty date string")

    date_token, time_token = _split_date_and_time(raw.strip())
    time_of_day = parse_time_token(time_token) if time_token is not None else time(0, 0)
    day = parse_date_token(date_token)
    return datetime.combine(day, time_of_day)


def format_datetime(ts: datetime) -> str:
    """Render a timestamp as ``MMM dd yyyy HH:mm`` (e.g. ``Dec 25 2023 14:00``)."""
    month = MONTH_ABBREVIATIONS[ts.month - 1]
    return f"{month} {ts.day:02d} {ts.year:04d} {ts.hour:02d}:{ts.minute:02d}"


def parse_display_datetime(text: str) -> datetime:
    """Parse the exact display layout produced by ``format_datetime``.

    Raises:
        DateFormatError: If the text is not in display layout
    """
    m = DISPLAY_RE.match(text)
    if not m or m.group("month") not in MONTH_ABBREVIATIONS:
        raise DateFormatError(f"Not a stored timestamp: {text!r}")

    try:
        day = resolve_date(
            int(m.group("year")),
            MONTH_ABBREVIATIONS.index(m.group("month")) + 1,
            int(m.group("day")),
        )
        return datetime.combine(day, time(int(m.group("hour")), int(m.group("minute"))))
    except ValueError as e:
        raise DateFormatError(f"Not a stored timestamp: {text!r}") from e
