"""
calconv.engines.persian
-----------------------
Persian solar Hijri calendars.

- Jalaali (astronomical): New Year from a table of break-point blocks fitted
  to the vernal equinox at Tehran. The table covers years -1096 .. 2327; New
  Years outside it are taken from the arithmetic rule instead.
- Modern (arithmetic): 683 leap years in a 2820-year cycle, closed form.

Both start on 1 Farvardin; the first six months have 31 days, the next five
30, and Esfand takes the remainder (29, or 30 in leap years).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from calconv.core.types import CalendarKind, PersianRule, YearLayout
from ._arith import cdiv, cycle_year

logger = logging.getLogger(__name__)

JALALI_ZERO = 1947954
PERSIAN_EPOCH = 1948320
LOWER_PERSIAN_YEAR = -1096
UPPER_PERSIAN_YEAR = 2327

_BREAKS = (-708, -221, -3, 6, 394, 720, 786, 1145, 1635, 1701, 1866, 2328)
_DELTAS = (1108, 1047, 984, 1249, 952, 891, 930, 866, 869, 844, 848, 852)

MONTH_NAMES = (
    "Farvardin", "Ordibehesht", "Khordad", "Tir", "Mordad", "Shahrivar",
    "Mehr", "Aban", "Azar", "Dey", "Bahman", "Esfand",
)


def in_jalaali_range(year: int) -> bool:
    return LOWER_PERSIAN_YEAR <= year <= UPPER_PERSIAN_YEAR


def jalaali_jd0(year: int) -> int:
    """JDN of the day before 1 Farvardin, from the break-point table."""
    if not in_jalaali_range(year):
        raise ValueError(f"Jalaali table covers years {LOWER_PERSIAN_YEAR}..{UPPER_PERSIAN_YEAR}, got {year}")
    for i, brk in enumerate(_BREAKS):
        if year < brk:
            rval = JALALI_ZERO + year * 365 + cdiv(_DELTAS[i] + year * 303, 1250)
            # The zero point drops one day in the first three blocks.
            if i < 3:
                rval -= 1
            return rval
    raise AssertionError("unreachable")


def modern_persian_jd0(year: int) -> int:
    """JDN of the day before 1 Farvardin, 2820-year arithmetic rule."""
    epyear = 474 + (year - 474) % 2820
    return ((epyear * 31 - 5) // 128 + (epyear - 1) * 365
            + ((year - epyear) // 2820) * 1029983 + PERSIAN_EPOCH)


def persian_new_year(year: int, rule: PersianRule = PersianRule.ASTRONOMICAL) -> int:
    """JDN of 1 Farvardin of `year`."""
    if rule is PersianRule.ASTRONOMICAL:
        if in_jalaali_range(year):
            return jalaali_jd0(year) + 1
        logger.debug("Persian year %d outside the Jalaali table; using the arithmetic rule", year)
    return modern_persian_jd0(year) + 1


def is_persian_leap_year(year: int, rule: PersianRule = PersianRule.ASTRONOMICAL) -> bool:
    return persian_new_year(year + 1, rule) - persian_new_year(year, rule) == 366


@dataclass(frozen=True)
class PersianYearData:
    """
    Year data for PERSIAN (rule=ASTRONOMICAL by default) or MODERN_PERSIAN
    (always ARITHMETIC). Each New Year is computed on its own, so layouts stay
    contiguous across the edges of the Jalaali table.
    """
    rule: PersianRule = PersianRule.ASTRONOMICAL
    kind: CalendarKind = CalendarKind.PERSIAN

    def year_layout(self, year: int) -> YearLayout:
        start = persian_new_year(year, self.rule)
        end = persian_new_year(year + 1, self.rule)
        return YearLayout(start, (31,) * 6 + (30,) * 5 + (end - start - 336, 0))

    def approx_year(self, jdn: int) -> int:
        return cycle_year(jdn, JALALI_ZERO + 1, 2820, 2820 * 365 + 683)
