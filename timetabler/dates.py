"""Date helpers for localized timetable headers and the stored freshness timestamp.

Month names are resolved from the explicit tables below instead of the runtime
locale, so "2 kwiecień 2024" parses the same way on every machine.
"""
import re
from datetime import date, datetime

from .errors import DateFormatError

MONTH_NAMES: dict[str, dict[str, int]] = {
    "pl": {
        # nominative
        "styczeń": 1, "luty": 2, "marzec": 3, "kwiecień": 4, "maj": 5, "czerwiec": 6,
        "lipiec": 7, "sierpień": 8, "wrzesień": 9, "październik": 10, "listopad": 11, "grudzień": 12,
        # genitive, as printed after a day number
        "stycznia": 1, "lutego": 2, "marca": 3, "kwietnia": 4, "maja": 5, "czerwca": 6,
        "lipca": 7, "sierpnia": 8, "września": 9, "października": 10, "listopada": 11, "grudnia": 12,
    },
    "en": {
        "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
        "july": 7, "august": 8, "september": 9, "october": 10, "november": 11, "december": 12,
    },
}

_LOCALIZED_DATE_RE = re.compile(r'^(\d{1,2})\s+(\w+)\s+(\d{4})$')
_ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def parse_localized(text: str, locale: str = "pl") -> date:
    """Parse ``<day> <month name> <year>`` into a date.

    Raises DateFormatError for empty input, an unknown locale or month name,
    an out-of-range day, or anything not matching the grammar.
    """
    if not text or not text.strip():
        raise DateFormatError(text, "empty string")
    months = MONTH_NAMES.get(locale)
    if months is None:
        raise DateFormatError(text, f"no month table for locale '{locale}'")

    match = _LOCALIZED_DATE_RE.match(text.strip())
    if not match:
        raise DateFormatError(text, "expected '<day> <month> <year>'")
    day_str, month_name, year_str = match.groups()

    month = months.get(month_name.lower())
    if month is None:
        raise DateFormatError(text, f"unknown month name '{month_name}'")
    try:
        return date(int(year_str), month, int(day_str))
    except ValueError as e:
        raise DateFormatError(text, str(e)) from e


def parse_iso(text: str) -> date:
    if not text or not _ISO_DATE_RE.match(text.strip()):
        raise DateFormatError(text, "expected YYYY-MM-DD")
    try:
        return datetime.strptime(text.strip(), "%Y-%m-%d").date()
    except ValueError as e:
        raise DateFormatError(text, str(e)) from e


def parse_timestamp(raw: str | None) -> date | None:
    """Interpret the stored freshness timestamp.

    An empty value means the timetable was never fetched and is returned as
    None without touching a parser; anything else must be an ISO date.
    """
    if raw is None or not raw.strip():
        return None
    return parse_iso(raw)
