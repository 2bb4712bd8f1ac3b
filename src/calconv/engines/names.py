"""
calconv.engines.names
---------------------
Display names for the months of every calendar kind. Parsing uses the
(editable) name tables on CalendarContext instead; these are for output only.
"""

from __future__ import annotations

from typing import Dict, Tuple

from calconv.core.types import CalendarKind
from calconv.engines import french, hebrew, persian
from calconv.engines.calendar import Calendar, ChineseCalendar

GREGORIAN_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

ISLAMIC_MONTH_NAMES = (
    "Muharram", "Safar", "Rabi' I", "Rabi' II", "Jumada I", "Jumada II",
    "Rajab", "Sha'ban", "Ramadan", "Shawwal", "Dhu al-Qi'dah", "Dhu al-Hijjah",
)

MONTH_NAMES: Dict[CalendarKind, Tuple[str, ...]] = {
    CalendarKind.GREGORIAN: GREGORIAN_MONTH_NAMES,
    CalendarKind.JULIAN: GREGORIAN_MONTH_NAMES,
    CalendarKind.JULIAN_GREGORIAN: GREGORIAN_MONTH_NAMES,
    CalendarKind.HEBREW: hebrew.MONTH_NAMES,
    CalendarKind.ISLAMIC: ISLAMIC_MONTH_NAMES,
    CalendarKind.FRENCH_REVOLUTIONARY: french.MONTH_NAMES,
    CalendarKind.PERSIAN: persian.MONTH_NAMES,
    CalendarKind.MODERN_PERSIAN: persian.MONTH_NAMES,
}


def month_label(cal: Calendar, month: int, year: int) -> str:
    """Human-readable name of a 1-based month slot in `year`."""
    if isinstance(cal, ChineseCalendar):
        number, is_leap = cal.month_label(month, year)
        return f"{number}{'L' if is_leap else ''}"

    names = MONTH_NAMES[cal.kind]
    if cal.kind == CalendarKind.HEBREW and month == 6 and hebrew.is_hebrew_leap_year(year):
        return "Adar I"
    return names[month - 1]


def format_date(cal: Calendar, day: int, month: int, year: int) -> str:
    return f"{day} {month_label(cal, month, year)} {year}"
