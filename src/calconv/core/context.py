"""
calconv.core.context
--------------------
CalendarContext: the configuration a conversion or parse runs against.

Owns the month- and weekday-name tables used by the parser, the optional
Chinese calendar table, the French Revolutionary and Persian leap policies and
the wall clock used for "now" and two-digit years. Treat a context as
single-writer, read-mostly configuration; the Calendar objects it hands out are
immutable and can be shared freely.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from .types import N_MONTHS, CalendarKind, FrenchLeapRule, PersianRule

if TYPE_CHECKING:
    from calconv.engines.calendar import Calendar
    from calconv.engines.chinese import ChineseCalendarTable

DEFAULT_MONTH_NAMES: Tuple[Optional[str], ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec", None,
)
DEFAULT_WEEKDAY_NAMES: Tuple[Optional[str], ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# Name matching compares at most this many leading characters.
NAME_MATCH_LEN = 3


def _name_matches(name: Optional[str], text: str) -> bool:
    if name is None or not text:
        return False
    n = min(len(text), NAME_MATCH_LEN)
    return name[:n].lower() == text[:n].lower()


@dataclass
class CalendarContext:
    month_names: List[Optional[str]] = field(default_factory=lambda: list(DEFAULT_MONTH_NAMES))
    weekday_names: List[Optional[str]] = field(default_factory=lambda: list(DEFAULT_WEEKDAY_NAMES))
    chinese_table: Optional["ChineseCalendarTable"] = None
    french_rule: FrenchLeapRule = FrenchLeapRule.EQUINOX_TABLE
    persian_rule: PersianRule = PersianRule.ASTRONOMICAL
    clock: Callable[[], float] = time.time

    _calendars: Dict[CalendarKind, "Calendar"] = field(default_factory=dict, init=False, repr=False, compare=False)
    _calendar_key: Tuple[object, ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Own copies, so tweak() never shares name tables with the original.
        self.month_names = list(self.month_names)
        self.weekday_names = list(self.weekday_names)
        if len(self.month_names) != N_MONTHS:
            raise ValueError(f"month_names must have {N_MONTHS} entries, got {len(self.month_names)}")
        if len(self.weekday_names) != 7:
            raise ValueError(f"weekday_names must have 7 entries, got {len(self.weekday_names)}")

    def tweak(self, **kwargs) -> "CalendarContext":
        """Returns a modified copy of this context."""
        return replace(self, **kwargs)

    # ---------------------------------------------------------
    # Calendars
    # ---------------------------------------------------------

    def calendar(self, kind) -> "Calendar":
        """The (cached) Calendar for `kind` under this context's policies."""
        from calconv.engines.factory import make_calendar

        kind = CalendarKind.coerce(kind)
        # Cached calendars keep their table alive, so its id() stays unique.
        key = (self.french_rule, self.persian_rule, id(self.chinese_table))
        if key != self._calendar_key:
            self._calendars.clear()
            self._calendar_key = key
        cal = self._calendars.get(kind)
        if cal is None:
            cal = self._calendars[kind] = make_calendar(kind, self)
        return cal

    def install_chinese_table(self, table: Optional["ChineseCalendarTable"]) -> None:
        """Install (or, with None, unload) the Chinese calendar table."""
        self.chinese_table = table

    def now_t2k(self) -> float:
        from .time import unix_to_t2k

        return unix_to_t2k(self.clock())

    # ---------------------------------------------------------
    # Name tables
    # ---------------------------------------------------------

    def set_month_name(self, index: int, name: Optional[str] = None) -> Optional[str]:
        """
        Sets the name of month `index` (1..13) and returns the current name.
        With name=None the table is only queried.
        """
        if not (1 <= index <= N_MONTHS):
            raise ValueError(f"month index must be in 1..{N_MONTHS}, got {index}")
        if name is not None:
            self.month_names[index - 1] = name
        return self.month_names[index - 1]

    def set_weekday_name(self, index: int, name: Optional[str] = None) -> Optional[str]:
        """Same as set_month_name, for weekdays 0..6 (Sunday = 0)."""
        if not (0 <= index <= 6):
            raise ValueError(f"weekday index must be in 0..6, got {index}")
        if name is not None:
            self.weekday_names[index] = name
        return self.weekday_names[index]

    def month_index(self, text: str) -> int:
        """
        1-based month whose name starts like `text` (first three characters at
        most, case-insensitive). Partial names resolve to the first match,
        so "m" is March and "ju" is June. 0 if nothing matches.
        """
        for i, name in enumerate(self.month_names):
            if _name_matches(name, text):
                return i + 1
        return 0

    def weekday_index(self, text: str) -> int:
        """Weekday (Sunday = 0) whose name starts like `text`; -1 if none."""
        for i, name in enumerate(self.weekday_names):
            if _name_matches(name, text):
                return i
        return -1


_default_context: Optional[CalendarContext] = None


def default_context() -> CalendarContext:
    """The process-wide context used when a call does not pass one."""
    global _default_context
    if _default_context is None:
        _default_context = CalendarContext()
    return _default_context


def set_default_context(ctx: CalendarContext) -> None:
    global _default_context
    _default_context = ctx
