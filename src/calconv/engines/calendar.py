"""
calconv.engines.calendar
------------------------
The Orchestrator. Binds one YearDataProvider and turns its year layouts into
forward (civil date -> JDN) and inverse (JDN -> civil date) conversions.
"""

from __future__ import annotations

import math
from typing import Tuple

from calconv.core.time import J2000_JDN, MINUTES_PER_DAY, MINUTES_PER_HOUR
from calconv.core.types import N_MONTHS, CalendarKind, CivilDate, SplitTime, YearLayout
from calconv.engines.chinese import ChineseYearData
from calconv.engines.gregorian import JulGregYearData
from calconv.engines.interfaces import YearDataProvider

# Last Julian-calendar day of the 1582 reform (4 October 1582, Julian).
GREGORIAN_SWITCHOVER_JDN = 2299160


def _check_month(month: int) -> None:
    if not (1 <= month <= N_MONTHS):
        raise ValueError(f"month must be in 1..{N_MONTHS}, got {month}")


class Calendar:
    """
    Converts between civil (day, month, year) and Julian Day Numbers for one
    calendar. Stateless after construction; safe to share between threads.
    """
    def __init__(self, years: YearDataProvider):
        self.years = years

    @property
    def kind(self) -> CalendarKind:
        return self.years.kind

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.years!r})"

    def year_layout(self, year: int) -> YearLayout:
        return self.years.year_layout(year)

    def new_year_jdn(self, year: int) -> int:
        return self.year_layout(year).year_start_jdn

    def days_in_year(self, year: int) -> int:
        return self.year_layout(year).year_length

    def months_in_year(self, year: int) -> int:
        return self.year_layout(year).n_months

    def days_in_month(self, month: int, year: int) -> int:
        """Length of `month` (1..13); 0 for a month slot unused this year."""
        _check_month(month)
        return self.year_layout(year).month_lengths[month - 1]

    # ---------------------------------------------------------
    # Forward: Civil Date to JDN
    # ---------------------------------------------------------

    def to_jdn(self, day: int, month: int, year: int) -> int:
        """
        JDN of the civil date. The day is not range-checked: day 0 or day 31 of
        a 30-day month simply lands on the neighbouring JDN.
        """
        _check_month(month)
        return self.year_layout(year).month_start_jdn(month) + day - 1

    # ---------------------------------------------------------
    # Inverse: JDN to Civil Date
    # ---------------------------------------------------------

    def _layout_containing(self, jdn: int) -> Tuple[int, YearLayout]:
        year = self.years.approx_year(jdn)
        layout = self.years.year_layout(year)
        step = 0
        while not layout.contains(jdn):
            direction = -1 if jdn < layout.year_start_jdn else 1
            if step and direction != step:
                raise ValueError(f"{self.kind.name} year data does not tile the day axis near JDN {jdn}")
            step = direction
            year += direction
            layout = self.years.year_layout(year)
        return year, layout

    def split_time(self, t2k: float) -> SplitTime:
        """Civil date and time of day of a timestamp (days from J2000.0)."""
        t = t2k + 0.5
        jdn = math.floor(t)
        minutes = (t - jdn) * MINUTES_PER_DAY
        whole = int(minutes)
        if whole == MINUTES_PER_DAY:
            # rounding pushed us onto the next day
            jdn += 1
            minutes = 0.0
            whole = 0
        seconds = (minutes - whole) * 60.0
        d = self.from_jdn(jdn + J2000_JDN)
        return SplitTime(d.year, d.month, d.day, whole // MINUTES_PER_HOUR, whole % MINUTES_PER_HOUR, seconds)

    def from_jdn(self, jdn: int) -> CivilDate:
        year, layout = self._layout_containing(jdn)
        day = jdn - layout.year_start_jdn
        for i, n in enumerate(layout.month_lengths):
            if day < n:
                return CivilDate(day + 1, i + 1, year, self.kind)
            day -= n
        raise AssertionError("unreachable: layout contains jdn")


class JulianGregorianCalendar(Calendar):
    """
    Julian calendar up to 4 October 1582, Gregorian from 15 October 1582.
    Civil dates in the skipped 5..14 October 1582 are read as Julian.
    """
    def __init__(self) -> None:
        super().__init__(JulGregYearData(julian=False))
        self.julian = Calendar(JulGregYearData(julian=True))
        self.gregorian = Calendar(self.years)

    @property
    def kind(self) -> CalendarKind:
        return CalendarKind.JULIAN_GREGORIAN

    @staticmethod
    def is_gregorian_date(day: int, month: int, year: int) -> bool:
        return (year, month, day) >= (1582, 10, 15)

    def _for_date(self, day: int, month: int, year: int) -> Calendar:
        return self.gregorian if self.is_gregorian_date(day, month, year) else self.julian

    def to_jdn(self, day: int, month: int, year: int) -> int:
        return self._for_date(day, month, year).to_jdn(day, month, year)

    def days_in_month(self, month: int, year: int) -> int:
        # Month lengths follow the calendar in force on the first of the month.
        return self._for_date(1, month, year).days_in_month(month, year)

    def year_layout(self, year: int) -> YearLayout:
        return (self.gregorian if year > 1582 else self.julian).year_layout(year)

    def from_jdn(self, jdn: int) -> CivilDate:
        cal = self.gregorian if jdn > GREGORIAN_SWITCHOVER_JDN else self.julian
        d = cal.from_jdn(jdn)
        return CivilDate(d.day, d.month, d.year, self.kind)


class ChineseCalendar(Calendar):
    def __init__(self, years: ChineseYearData):
        super().__init__(years)

    def intercalary_month(self, year: int) -> int:
        """1-based slot of the leap month in `year` (0 if the year has none)."""
        return self.years.intercalary_month(year)

    def month_label(self, month: int, year: int) -> Tuple[int, bool]:
        """Traditional (month number, is_leap) for a 13-slot month index."""
        leap = self.intercalary_month(year)
        if leap and month >= leap:
            return month - 1, month == leap
        return month, False
