"""Date and time token parsers.

Every parser is pure and total: it returns a well-formed string or None,
never a partial value, and never raises.
"""

import re
from typing import Any, Optional

from ticket_context.normalizers.text import norm_space

MONTHS = {
    "jan": "01", "feb": "02", "mar": "03", "apr": "04", "may": "05", "jun": "06",
    "jul": "07", "aug": "08", "sep": "09", "oct": "10", "nov": "11", "dec": "12",
}

MONTH_NAME_PATTERN = (
    r"Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|June?|July?|Aug(?:ust)?"
    r"|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?"
)

# "November 2, 2025", "Nov 2, 2025", "Sept 14, 2026"
MONTH_DATE_RE = re.compile(rf"\b({MONTH_NAME_PATTERN})\b\s+(\d{{1,2}}),\s+(\d{{4}})", re.I)
# "11/2/2025"
NUMERIC_DATE_RE = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b")
# "7 pm", "7:30pm", "07:00 PM"
TIME_12_RE = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b", re.I)
ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
ISO_TIME_RE = re.compile(r"T(\d{2}):(\d{2})")


def format_day(year: str, month: str, day: str) -> Optional[str]:
    """Zero-padded YYYY-MM-DD, or None for an impossible month or day."""
    if not 1 <= int(month) <= 12 or not 1 <= int(day) <= 31:
        return None
    return f"{year}-{int(month):02d}-{int(day):02d}"


def month_number(token: str) -> Optional[str]:
    """Two-digit month for a full or abbreviated month name."""
    return MONTHS.get(token[:3].lower())


def parse_month_date_year(text: Any) -> Optional[str]:
    """Parse "<Month> D, YYYY" anywhere in text to YYYY-MM-DD."""
    t = norm_space(text)
    if not t:
        return None

    match = MONTH_DATE_RE.search(t)
    if not match:
        return None

    month = month_number(match.group(1))
    if not month:
        return None
    return format_day(match.group(3), month, match.group(2))


def parse_numeric_date(text: Any) -> Optional[str]:
    """Parse US-style "M/D/YYYY" to YYYY-MM-DD."""
    t = norm_space(text)
    if not t:
        return None

    match = NUMERIC_DATE_RE.search(t)
    if not match:
        return None
    return format_day(match.group(3), match.group(1), match.group(2))


def parse_time_12(text: Any) -> Optional[str]:
    """Parse the first valid 12-hour clock time to 24-hour HH:MM."""
    t = norm_space(text)
    if not t:
        return None

    for match in TIME_12_RE.finditer(t):
        hour = int(match.group(1))
        minute = int(match.group(2) or "0")
        if not 1 <= hour <= 12 or minute > 59:
            continue

        meridiem = match.group(3).lower()
        if meridiem == "pm" and hour != 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0
        return f"{hour:02d}:{minute:02d}"

    return None


def parse_iso_datetime(value: Any) -> tuple[Optional[str], Optional[str]]:
    """Split an ISO-ish "2025-11-02T19:30:00" into (date_day, time_24).

    Both parts are independently optional.
    """
    if value is None or isinstance(value, (dict, list)):
        return None, None
    s = str(value).strip()
    if not s:
        return None, None

    date_day = None
    date_match = ISO_DATE_RE.match(s)
    if date_match:
        date_day = format_day(*date_match.groups())

    time_24 = None
    time_match = ISO_TIME_RE.search(s)
    if time_match:
        hour, minute = time_match.groups()
        if int(hour) <= 23 and int(minute) <= 59:
            time_24 = f"{hour}:{minute}"

    return date_day, time_24
