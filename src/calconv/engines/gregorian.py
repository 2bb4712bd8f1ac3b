"""
calconv.engines.gregorian
-------------------------
Julian and (proleptic) Gregorian year data, by plain integer arithmetic.
Both calendars are proleptic in both directions; there is no year zero skip,
so year 0 is 1 BC and is a leap year in both.
"""

from __future__ import annotations

from dataclasses import dataclass

from calconv.core.types import CalendarKind, YearLayout
from ._arith import cycle_year

# JDN of 1 January, year 0 (Gregorian) is JUL_GREG_CALENDAR_EPOCH + 1.
JUL_GREG_CALENDAR_EPOCH = 1721060

MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31, 0)
#                Jan Feb Mar Apr May Jun Jul Aug Sep Oct Nov Dec


def is_gregorian_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def is_julian_leap_year(year: int) -> bool:
    return year % 4 == 0


@dataclass(frozen=True)
class JulGregYearData:
    """Year-data provider for the Gregorian (julian=False) or Julian calendar."""
    julian: bool = False

    @property
    def kind(self) -> CalendarKind:
        return CalendarKind.JULIAN if self.julian else CalendarKind.GREGORIAN

    def is_leap_year(self, year: int) -> bool:
        return is_julian_leap_year(year) if self.julian else is_gregorian_leap_year(year)

    def year_layout(self, year: int) -> YearLayout:
        # Leap days before 1 Jan of `year`, counting year 0 itself (fixed below).
        days = year * 365 + year // 4
        if self.julian:
            days -= 2
        else:
            days += -(year // 100) + year // 400

        months = list(MONTH_LENGTHS)
        if self.is_leap_year(year):
            months[1] = 29
            days -= 1
        return YearLayout(days + JUL_GREG_CALENDAR_EPOCH + 1, tuple(months))

    def approx_year(self, jdn: int) -> int:
        if self.julian:
            # The Julian calendar repeats every four years.
            return cycle_year(jdn, JUL_GREG_CALENDAR_EPOCH - 2, 4, 4 * 365 + 1)
        # 400 Gregorian years contain 97 leap days.
        return cycle_year(jdn, JUL_GREG_CALENDAR_EPOCH, 400, 400 * 365 + 97)
