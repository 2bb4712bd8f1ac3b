"""
calconv.engines.hebrew
----------------------
Arithmetic Hebrew calendar (Explanatory Supplement, p. 586).

New Year (1 Tishri) is derived from the molad, the mean lunar conjunction,
counted in days and halakim (1080 halakim to the hour), then postponed by the
dehiyyot. Months run Tishri (1) .. Elul (13); month 7 is Adar II and has zero
days in common years.

One lunation is 29 days 13753 halakim. 25920 lunations are exactly 765433
days, which keeps the halakim products small. 235 lunations make up 19 years,
so the calendar repeats exactly every 98496 years (35975351 days).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from calconv.core.types import CalendarKind, YearLayout
from ._arith import cycle_year

HEBREW_CALENDAR_EPOCH = 347996
HALAKIM_PER_HOUR = 1080
HALAKIM_PER_DAY = 24 * HALAKIM_PER_HOUR

LUNATION_DAYS = 29
LUNATION_HALAKIM = 13753
LUNATIONS_PER_CYCLE = 25920
DAYS_PER_CYCLE = 765433

VALID_YEAR_LENGTHS = (353, 354, 355, 383, 384, 385)

MONTH_NAMES = (
    "Tishri", "Heshvan", "Kislev", "Tevet", "Shevat", "Adar",
    "Adar II", "Nisan", "Iyar", "Sivan", "Tammuz", "Av", "Elul",
)


def is_hebrew_leap_year(year: int) -> bool:
    return (year * 7 - 6) % 19 >= 12


def lunations_to_tishri_1(year: int) -> int:
    """Lunations elapsed from the epoch molad to the molad of Tishri of `year`."""
    year_within_cycle = (year - 1) % 19
    full_cycles = (year - 1 - year_within_cycle) // 19
    return full_cycles * 235 + year_within_cycle * 12 + (year_within_cycle * 7 + 1) // 19


def molad_tishri(year: int) -> Tuple[int, int]:
    """(day, halakim) of the molad of Tishri, day counted from the epoch."""
    lunations = lunations_to_tishri_1(year)
    within = lunations % LUNATIONS_PER_CYCLE
    cycles = (lunations - within) // LUNATIONS_PER_CYCLE

    # The epoch molad (BaHaRaD) is day 2, 5604 halakim.
    day = 2 + cycles * DAYS_PER_CYCLE + within * LUNATION_DAYS
    halakim = 5604 + within * LUNATION_HALAKIM
    return day + halakim // HALAKIM_PER_DAY, halakim % HALAKIM_PER_DAY


def tishri_1(year: int) -> int:
    """JDN of 1 Tishri of `year`, after the postponements."""
    day, halakim = molad_tishri(year)
    weekday = day % 7

    if weekday == 3 and halakim >= 9 * HALAKIM_PER_HOUR + 204 and not is_hebrew_leap_year(year):
        day += 2
    elif weekday == 2 and halakim >= 15 * HALAKIM_PER_HOUR + 589 and is_hebrew_leap_year(year - 1):
        day += 1
    else:
        if halakim > 18 * HALAKIM_PER_HOUR:
            day += 1
        if day % 7 in (1, 4, 6):
            day += 1
    return day + HEBREW_CALENDAR_EPOCH


@dataclass(frozen=True)
class HebrewYearData:

    @property
    def kind(self) -> CalendarKind:
        return CalendarKind.HEBREW

    def year_layout(self, year: int) -> YearLayout:
        start = tishri_1(year)
        year_length = tishri_1(year + 1) - start

        months = [0] * 13
        for i in range(6):
            months[i] = months[i + 7] = 30 - (i & 1)
        if is_hebrew_leap_year(year):
            months[5] = 30      # Adar I
            months[6] = 29      # Adar II
        if year_length in (353, 383):       # deficient: Kislev loses a day
            months[2] = 29
        if year_length in (355, 385):       # complete: Heshvan gains one
            months[1] = 30
        return YearLayout(start, tuple(months))

    def approx_year(self, jdn: int) -> int:
        return cycle_year(jdn, HEBREW_CALENDAR_EPOCH - 235, 98496, 35975351)
