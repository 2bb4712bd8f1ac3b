"""
calconv.engines.french
----------------------
French Revolutionary calendar: twelve months of 30 days, then five (six in
leap years) complementary days kept as a thirteenth "month".

Only years 3, 7, 11 and 15 are known leap years; the calendar was abolished
before any later rule took effect. The default EQUINOX_TABLE rule uses
break-point blocks fitted to the autumn equinox and reproduces those years.
The arithmetic rules extend the calendar with the proposals of the time,
shifting the leap year from 19 to 20 to match the table. Years before
year 1 ("before the Revolution") are handled by every rule.
"""

from __future__ import annotations

from dataclasses import dataclass

from calconv.core.types import CalendarKind, FrenchLeapRule, YearLayout
from ._arith import cdiv, cycle_year

REVOLUTIONARY_CALENDAR_EPOCH = 2375475

_BREAKS = (-814, -492, -331, -108, 0, 144, 301, 487, 611)
_DELTAS = (405, 439, 498, 469, 419, 393, 322, 184, 92)

MONTH_NAMES = (
    "Vendemiaire", "Brumaire", "Frimaire", "Nivose", "Pluviose", "Ventose",
    "Germinal", "Floreal", "Prairial", "Messidor", "Thermidor", "Fructidor",
    "Sansculottides",
)


def _new_year_from_table(year: int) -> int:
    for i, brk in enumerate(_BREAKS):
        if year < brk or i == len(_BREAKS) - 1:
            rval = REVOLUTIONARY_CALENDAR_EPOCH + year * 365 + cdiv(_DELTAS[i] + year * 683, 2820)
            # The zero point drops one day in the first five blocks.
            if i < 5:
                rval -= 1
            return rval
    raise AssertionError("unreachable")


def _leap_days(year: int, rule: FrenchLeapRule) -> int:
    if rule is FrenchLeapRule.FOUR_YEAR:
        return cdiv(year, 4)
    if rule is FrenchLeapRule.RULE_128:
        return cdiv(year, 4) - cdiv(year, 128)
    leaps = cdiv(year, 4) - cdiv(year, 100) + cdiv(year, 400)
    if rule is FrenchLeapRule.GREGORIAN_4000:
        leaps -= cdiv(year, 4000)
    return leaps


def french_new_year(year: int, rule: FrenchLeapRule = FrenchLeapRule.EQUINOX_TABLE) -> int:
    """JDN of 1 Vendemiaire of `year` under `rule`."""
    if rule is FrenchLeapRule.EQUINOX_TABLE:
        return _new_year_from_table(year)

    rval = REVOLUTIONARY_CALENDAR_EPOCH + year * 365
    if year >= 20:
        year -= 1
    rval += _leap_days(year, rule)
    if year <= 0:
        rval -= 1
    return rval


@dataclass(frozen=True)
class FrenchYearData:
    rule: FrenchLeapRule = FrenchLeapRule.EQUINOX_TABLE

    @property
    def kind(self) -> CalendarKind:
        return CalendarKind.FRENCH_REVOLUTIONARY

    def year_layout(self, year: int) -> YearLayout:
        start = french_new_year(year, self.rule)
        end = french_new_year(year + 1, self.rule)
        return YearLayout(start, (30,) * 12 + (end - start - 360,))

    def approx_year(self, jdn: int) -> int:
        return cycle_year(jdn, REVOLUTIONARY_CALENDAR_EPOCH - 1, 2820, 2820 * 365 + 683)
