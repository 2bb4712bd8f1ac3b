from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple, Union, cast

from .core.context import CalendarContext, default_context, set_default_context
from .core.errors import CalendarUnavailableError
from .core.time import jd_to_t2k, t2k_to_jd
from .core.types import CalendarKind, ParseStatus, SplitTime, YearLayout
from .engines.calendar import Calendar, ChineseCalendar
from .engines.chinese import ChineseCalendarTable
from .parsing.lunar_phase import find_nearest_lunar_phase
from .parsing.parser import parse_time

logger = logging.getLogger(__name__)

__all__ = [
    "default_context",
    "set_default_context",
    "get_calendar",
    "to_jdn",
    "from_jdn",
    "days_in_month",
    "year_layout",
    "chinese_intercalary_month",
    "parse_datetime",
    "parse_jd",
    "split_time",
    "set_month_name",
    "set_weekday_name",
    "install_chinese_calendar_table",
    "load_chinese_calendar_table",
    "find_nearest_lunar_phase",
]


def _ctx(context: Optional[CalendarContext]) -> CalendarContext:
    return context if context is not None else default_context()


def get_calendar(calendar, *, context: Optional[CalendarContext] = None) -> Calendar:
    """Calendar object for a CalendarKind, integer code or name. Raises on an unknown calendar."""
    return _ctx(context).calendar(calendar)

# ============================================================
# Conversions (failures are reported as 0 / None)
# ============================================================

def to_jdn(day: int, month: int, year: int, calendar=CalendarKind.GREGORIAN, *,
           context: Optional[CalendarContext] = None) -> int:
    """
    JDN of a civil date; 0 when the calendar is unknown, the month is not
    1..13 or the calendar has no data for the year (Chinese).
    """
    try:
        return get_calendar(calendar, context=context).to_jdn(day, month, year)
    except (ValueError, CalendarUnavailableError) as e:
        logger.debug("to_jdn(%r, %r, %r, %r) failed: %s", day, month, year, calendar, e)
        return 0


def from_jdn(jdn: int, calendar=CalendarKind.GREGORIAN, *,
             context: Optional[CalendarContext] = None) -> Optional[Tuple[int, int, int]]:
    """(day, month, year) of a JDN, or None on failure."""
    try:
        return get_calendar(calendar, context=context).from_jdn(int(jdn)).as_tuple()
    except (ValueError, CalendarUnavailableError) as e:
        logger.debug("from_jdn(%r, %r) failed: %s", jdn, calendar, e)
        return None


def days_in_month(month: int, year: int, calendar=CalendarKind.GREGORIAN, *,
                  context: Optional[CalendarContext] = None) -> int:
    try:
        return get_calendar(calendar, context=context).days_in_month(month, year)
    except (ValueError, CalendarUnavailableError) as e:
        logger.debug("days_in_month(%r, %r, %r) failed: %s", month, year, calendar, e)
        return 0


def year_layout(year: int, calendar=CalendarKind.GREGORIAN, *,
                context: Optional[CalendarContext] = None) -> YearLayout:
    """New Year JDN and the 13 month lengths of `year`. Raises on failure."""
    return get_calendar(calendar, context=context).year_layout(year)


def chinese_intercalary_month(year: int, *, context: Optional[CalendarContext] = None) -> int:
    """Slot (1..13) of the leap month in Chinese `year`, 0 if none. Raises without a table."""
    cal = cast(ChineseCalendar, get_calendar(CalendarKind.CHINESE, context=context))
    return cal.intercalary_month(year)

# ============================================================
# Text parsing and timestamps
# ============================================================

def parse_datetime(base_t2k: float, text: str, format_flags: int = 0, *,
                   context: Optional[CalendarContext] = None) -> Tuple[float, ParseStatus]:
    """
    Parses `text` relative to `base_t2k` (days from J2000.0). Returns
    (t2k, status); a negative status comes with `base_t2k` unchanged.
    """
    result = parse_time(base_t2k, text, format_flags, context=_ctx(context))
    return result.t2k, result.status


def parse_jd(base_jd: float, text: str, format_flags: int = 0, *,
             context: Optional[CalendarContext] = None) -> Tuple[float, ParseStatus]:
    """parse_datetime() on Julian Dates instead of J2000 timestamps."""
    t2k, status = parse_datetime(jd_to_t2k(base_jd), text, format_flags, context=context)
    return t2k_to_jd(t2k), status


def split_time(t2k: float, calendar=CalendarKind.GREGORIAN, *,
               context: Optional[CalendarContext] = None) -> SplitTime:
    return get_calendar(calendar, context=context).split_time(t2k)

# ============================================================
# Context configuration (default context unless one is passed)
# ============================================================

def set_month_name(index: int, name: Optional[str] = None, *,
                   context: Optional[CalendarContext] = None) -> Optional[str]:
    return _ctx(context).set_month_name(index, name)


def set_weekday_name(index: int, name: Optional[str] = None, *,
                     context: Optional[CalendarContext] = None) -> Optional[str]:
    return _ctx(context).set_weekday_name(index, name)


def install_chinese_calendar_table(table: Union[bytes, bytearray, ChineseCalendarTable, None], *,
                                   context: Optional[CalendarContext] = None) -> Optional[ChineseCalendarTable]:
    """Installs a table (raw bytes or decoded); None unloads it."""
    if isinstance(table, (bytes, bytearray)):
        table = ChineseCalendarTable.from_bytes(bytes(table))
    _ctx(context).install_chinese_table(table)
    return table


def load_chinese_calendar_table(path: Union[str, Path], *,
                                context: Optional[CalendarContext] = None) -> ChineseCalendarTable:
    table = ChineseCalendarTable.from_file(path)
    _ctx(context).install_chinese_table(table)
    return table
