"""
calconv.engines.islamic
-----------------------
Tabular Islamic calendar: a 30-year cycle of exactly 10631 days containing
11 leap years (2, 5, 7, 10, 13, 16, 18, 21, 24, 26, 29).
"""

from __future__ import annotations

from dataclasses import dataclass

from calconv.core.types import CalendarKind, YearLayout
from ._arith import cycle_year

ISLAMIC_CALENDAR_EPOCH = 1948086
THIRTY_ISLAMIC_YEARS = 10631


def is_islamic_leap_year(year: int) -> bool:
    return ((year % 30) * 11 + 3) % 30 > 18


@dataclass(frozen=True)
class IslamicYearData:

    @property
    def kind(self) -> CalendarKind:
        return CalendarKind.ISLAMIC

    def year_layout(self, year: int) -> YearLayout:
        year_within_cycle = year % 30
        cycles = (year - year_within_cycle) // 30
        tval = year_within_cycle * 11 + 3

        start = ISLAMIC_CALENDAR_EPOCH + cycles * THIRTY_ISLAMIC_YEARS + year_within_cycle * 354 + tval // 30

        # Months alternate 30/29; the twelfth gains a day in leap years.
        months = [30 - (i % 2) for i in range(11)]
        months.append(29 + (1 if tval % 30 > 18 else 0))
        months.append(0)
        return YearLayout(start, tuple(months))

    def approx_year(self, jdn: int) -> int:
        return cycle_year(jdn, ISLAMIC_CALENDAR_EPOCH - 1, 30, THIRTY_ISLAMIC_YEARS)
