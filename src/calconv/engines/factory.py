"""
calconv.engines.factory
-----------------------
Builds live Calendar objects from a CalendarKind and the policies held by a
CalendarContext. One arm per kind; there is no default branch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

from calconv.core.types import CalendarKind, PersianRule
from calconv.engines.calendar import Calendar, ChineseCalendar, JulianGregorianCalendar
from calconv.engines.chinese import ChineseYearData
from calconv.engines.french import FrenchYearData
from calconv.engines.gregorian import JulGregYearData
from calconv.engines.hebrew import HebrewYearData
from calconv.engines.islamic import IslamicYearData
from calconv.engines.persian import PersianYearData

if TYPE_CHECKING:
    from calconv.core.context import CalendarContext


_BUILDERS: Dict[CalendarKind, Callable[["CalendarContext"], Calendar]] = {
    CalendarKind.GREGORIAN: lambda ctx: Calendar(JulGregYearData(julian=False)),
    CalendarKind.JULIAN: lambda ctx: Calendar(JulGregYearData(julian=True)),
    CalendarKind.HEBREW: lambda ctx: Calendar(HebrewYearData()),
    CalendarKind.ISLAMIC: lambda ctx: Calendar(IslamicYearData()),
    CalendarKind.FRENCH_REVOLUTIONARY: lambda ctx: Calendar(FrenchYearData(ctx.french_rule)),
    CalendarKind.PERSIAN: lambda ctx: Calendar(PersianYearData(ctx.persian_rule, CalendarKind.PERSIAN)),
    CalendarKind.JULIAN_GREGORIAN: lambda ctx: JulianGregorianCalendar(),
    CalendarKind.CHINESE: lambda ctx: ChineseCalendar(ChineseYearData(ctx.chinese_table)),
    CalendarKind.MODERN_PERSIAN: lambda ctx: Calendar(PersianYearData(PersianRule.ARITHMETIC, CalendarKind.MODERN_PERSIAN)),
}


def make_calendar(kind, context: "CalendarContext") -> Calendar:
    """The universal entry point: CalendarKind (or code/name) -> Calendar."""
    return _BUILDERS[CalendarKind.coerce(kind)](context)
