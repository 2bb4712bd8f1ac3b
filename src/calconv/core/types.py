from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import Tuple, Union

from .errors import UnsupportedCalendarError

# Every layout carries 13 slots: the Hebrew and Chinese calendars can have an
# intercalary month, and the French complementary days are kept as month 13.
N_MONTHS = 13

CALENDAR_MASK = 0xF


class CalendarKind(IntEnum):
    GREGORIAN = 0
    JULIAN = 1
    HEBREW = 2
    ISLAMIC = 3
    FRENCH_REVOLUTIONARY = 4
    PERSIAN = 5
    JULIAN_GREGORIAN = 6
    CHINESE = 7
    MODERN_PERSIAN = 8

    @classmethod
    def coerce(cls, value: Union["CalendarKind", int, str]) -> "CalendarKind":
        """Accept a member, an integer code or a (case-insensitive) member name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_").replace(" ", "_")
            if key in cls.__members__:
                return cls.__members__[key]
            raise UnsupportedCalendarError(f"Unknown calendar '{value}'. Available: {[k.lower() for k in cls.__members__]}")
        try:
            return cls(int(value))
        except (TypeError, ValueError) as e:
            raise UnsupportedCalendarError(f"Unknown calendar code {value!r}") from e

    @property
    def max_month(self) -> int:
        """Largest month number a date field can hold (13 for the lunisolar calendars)."""
        return 13 if self in (CalendarKind.HEBREW, CalendarKind.CHINESE) else 12


class FrenchLeapRule(Enum):
    EQUINOX_TABLE = "equinox-table"
    FOUR_YEAR = "four-year"
    GREGORIAN = "gregorian"
    GREGORIAN_4000 = "gregorian-4000"
    RULE_128 = "rule-128"


class PersianRule(Enum):
    ASTRONOMICAL = "astronomical"
    ARITHMETIC = "arithmetic"


class TimeFormat(IntFlag):
    """Field-order flags for the text parser. The calendar code sits in the low nibble."""
    DMY = 0
    YEAR_FIRST = 0x800
    MONTH_DAY = 0x1000
    TWO_DIGIT_YEAR = 0x10000

    YMD = YEAR_FIRST | MONTH_DAY
    YDM = YEAR_FIRST
    MDY = MONTH_DAY


def calendar_from_flags(flags: int) -> CalendarKind:
    return CalendarKind.coerce(int(flags) & CALENDAR_MASK)


class ParseStatus(IntEnum):
    UTC = 1
    LOCAL = 0
    BAD_FORMAT = -1
    BAD_NUMBER = -2
    EMPTY_OR_TOO_LONG = -3
    BAD_FIELD = -4
    CALENDAR_UNAVAILABLE = -5

    @property
    def ok(self) -> bool:
        return self >= 0


@dataclass(frozen=True)
class YearLayout:
    year_start_jdn: int
    month_lengths: Tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.month_lengths) != N_MONTHS:
            raise ValueError(f"month_lengths must have {N_MONTHS} entries, got {len(self.month_lengths)}")

    @property
    def year_length(self) -> int:
        return sum(self.month_lengths)

    @property
    def next_year_start_jdn(self) -> int:
        return self.year_start_jdn + self.year_length

    @property
    def n_months(self) -> int:
        return sum(1 for n in self.month_lengths if n)

    def contains(self, jdn: int) -> bool:
        return self.year_start_jdn <= jdn < self.next_year_start_jdn

    def month_start_jdn(self, month: int) -> int:
        if not (1 <= month <= N_MONTHS):
            raise ValueError(f"month must be in 1..{N_MONTHS}, got {month}")
        return self.year_start_jdn + sum(self.month_lengths[:month - 1])


@dataclass(frozen=True)
class CivilDate:
    day: int
    month: int
    year: int
    calendar: CalendarKind = CalendarKind.GREGORIAN

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.day, self.month, self.year)


@dataclass(frozen=True)
class SplitTime:
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: float
