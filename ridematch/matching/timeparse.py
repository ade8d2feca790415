"""Clock-time and calendar-date parsing for time compatibility scoring.

Accepted clock formats:
  - 12-hour: "3:00 PM", "03:00 pm", "3:00PM" (hour 1-12)
  - 24-hour: "15:00", "7:05", "15:00:00" (hour 0-23, seconds ignored)

Parsers return None on failure instead of raising; callers decide what an
unknown value means via TimeParsePolicy.
"""

import logging
import re
from datetime import date, datetime

from ridematch.core.config import TimeParsePolicy

logger = logging.getLogger(__name__)

# Returned by date_difference_days when either date is unparsable.
DATE_MISMATCH_SENTINEL = 999

_CLOCK_RE = re.compile(
    r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])?\s*$",
)

_DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d", "%Y/%m/%d", "%d/%m/%Y")


def parse_clock_time(text: str) -> int | None:
    """Parse a clock-time string into minutes since midnight, or None."""
    match = _CLOCK_RE.match(text or "")
    if match is None:
        logger.warning("Unparsable time %r", text)
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = (match.group(4) or "").upper()

    if minutes > 59:
        logger.warning("Minute out of range in time %r", text)
        return None

    if period:
        if not 1 <= hours <= 12:
            logger.warning("Hour out of range for 12-hour time %r", text)
            return None
        if period == "AM" and hours == 12:
            hours = 0
        elif period == "PM" and hours != 12:
            hours += 12
    elif hours > 23:
        logger.warning("Hour out of range for 24-hour time %r", text)
        return None

    return hours * 60 + minutes


def resolve_clock_time(text: str, policy: TimeParsePolicy) -> int | None:
    """Parse a time and apply the policy for unparsable values.

    Under TimeParsePolicy.MIDNIGHT a failed parse resolves to 0 (00:00);
    otherwise it stays None.
    """
    minutes = parse_clock_time(text)
    if minutes is None and policy is TimeParsePolicy.MIDNIGHT:
        return 0
    return minutes


def time_difference_minutes(
    time1: str,
    time2: str,
    policy: TimeParsePolicy = TimeParsePolicy.MIDNIGHT,
) -> int | None:
    """Absolute difference in minutes between two clock times.

    Returns None if either time is unknown under the given policy.
    """
    m1 = resolve_clock_time(time1, policy)
    m2 = resolve_clock_time(time2, policy)
    if m1 is None or m2 is None:
        return None
    return abs(m1 - m2)


def parse_ride_date(text: str) -> date | None:
    """Parse a calendar date string (ISO date/datetime, Y/M/D or D/M/Y)."""
    value = (text or "").strip()
    if not value:
        return None
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def date_difference_days(date1: str, date2: str) -> int:
    """Absolute calendar-day difference between two date strings.

    Returns DATE_MISMATCH_SENTINEL if either date cannot be parsed.
    """
    d1 = parse_ride_date(date1)
    d2 = parse_ride_date(date2)
    if d1 is None or d2 is None:
        logger.warning("Unparsable date pair (%r, %r)", date1, date2)
        return DATE_MISMATCH_SENTINEL
    return abs((d2 - d1).days)
