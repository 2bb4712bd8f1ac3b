"""
calconv.engines.chinese
-----------------------
Table-driven Chinese lunisolar calendar.

The calendar is too irregular to compute in closed form, so year data is
pre-compiled into a compact binary table:

    header   <hh   year_count, base_year
    records  year_count x 3 bytes, little-endian

Each 24-bit record packs
    bits 0..12   1 = month has 30 days, 0 = 29 days (13 slots)
    bits 13..23  v; v % 14 is the regular month the leap month follows
                 (0 = no leap month, the 13th slot then has 0 days) and
                 v // 14 is the New Year offset in days.

    new_year_jdn = 365*y + trunc(y/4) + 757862 + offset

Year numbering: Gregorian 2000 is Chinese year 4637.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

from calconv.core.errors import ChineseCalendarUnavailableError, ChineseYearOutOfRangeError
from calconv.core.types import N_MONTHS, CalendarKind, YearLayout
from ._arith import cdiv, cycle_year

logger = logging.getLogger(__name__)

CHINESE_CALENDAR_EPOCH = 757862
GREGORIAN_2000_CHINESE_YEAR = 4637

_HEADER = struct.Struct("<hh")
_RECORD_SIZE = 3
_MAX_OFFSET = (1 << 11) // 14 - 1


def _base_new_year(year: int) -> int:
    return 365 * year + cdiv(year, 4) + CHINESE_CALENDAR_EPOCH


@dataclass(frozen=True)
class ChineseYearRecord:
    """One decoded year: 30-day month mask, leap position and New Year offset."""
    long_months: int
    intercalary: int
    offset: int

    def __post_init__(self) -> None:
        if not (0 <= self.long_months < (1 << N_MONTHS)):
            raise ValueError(f"long_months must fit in {N_MONTHS} bits, got {self.long_months:#x}")
        if not (0 <= self.intercalary <= 12):
            raise ValueError(f"intercalary must be in 0..12, got {self.intercalary}")
        if not (0 <= self.offset <= _MAX_OFFSET):
            raise ValueError(f"offset must be in 0..{_MAX_OFFSET}, got {self.offset}")

    @classmethod
    def unpack(cls, packed: int) -> "ChineseYearRecord":
        v = packed >> N_MONTHS
        return cls(packed & ((1 << N_MONTHS) - 1), v % 14, v // 14)

    def pack(self) -> int:
        return self.long_months + (self.intercalary + self.offset * 14) * (1 << N_MONTHS)

    @classmethod
    def from_layout(
        cls,
        year: int,
        new_year_jdn: int,
        month_lengths: Sequence[int],
        intercalary: int = 0,
    ) -> "ChineseYearRecord":
        """
        Compile one year. `month_lengths` lists the year's months in order
        (12, or 13 when `intercalary` names the month the leap month follows).
        """
        expected = 13 if intercalary else 12
        if len(month_lengths) != expected:
            raise ValueError(f"expected {expected} month lengths, got {len(month_lengths)}")
        mask = 0
        for i, n in enumerate(month_lengths):
            if n not in (29, 30):
                raise ValueError(f"Chinese months have 29 or 30 days, got {n}")
            if n == 30:
                mask |= 1 << i
        return cls(mask, intercalary, new_year_jdn - _base_new_year(year))

    @property
    def leap_position(self) -> int:
        """1-based slot of the leap month in the 13-slot layout; 0 if none."""
        return self.intercalary + 1 if self.intercalary else 0

    def month_lengths(self) -> Tuple[int, ...]:
        months = [30 if (self.long_months >> i) & 1 else 29 for i in range(N_MONTHS)]
        if not self.intercalary:
            months[12] = 0
        return tuple(months)


@dataclass(frozen=True)
class ChineseCalendarTable:
    base_year: int
    records: Tuple[ChineseYearRecord, ...]

    @classmethod
    def from_records(cls, base_year: int, records: Iterable[ChineseYearRecord]) -> "ChineseCalendarTable":
        return cls(int(base_year), tuple(records))

    @classmethod
    def from_bytes(cls, data: bytes) -> "ChineseCalendarTable":
        if len(data) < _HEADER.size:
            raise ValueError("Chinese calendar table is shorter than its header")
        n_years, base_year = _HEADER.unpack_from(data, 0)
        if n_years < 0:
            raise ValueError(f"Chinese calendar table has a negative year count ({n_years})")
        needed = _HEADER.size + _RECORD_SIZE * n_years
        if len(data) < needed:
            raise ValueError(f"Chinese calendar table truncated: {len(data)} bytes, need {needed}")

        records = []
        for i in range(n_years):
            pos = _HEADER.size + _RECORD_SIZE * i
            records.append(ChineseYearRecord.unpack(int.from_bytes(data[pos:pos + _RECORD_SIZE], "little")))
        return cls(base_year, tuple(records))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ChineseCalendarTable":
        table = cls.from_bytes(Path(path).read_bytes())
        logger.debug("loaded Chinese calendar table %s: years %d..%d", path, *table.year_range)
        return table

    def to_bytes(self) -> bytes:
        out = bytearray(_HEADER.pack(len(self.records), self.base_year))
        for rec in self.records:
            out += rec.pack().to_bytes(_RECORD_SIZE, "little")
        return bytes(out)

    @property
    def year_range(self) -> Tuple[int, int]:
        """(first, last) year covered, inclusive."""
        return self.base_year, self.base_year + len(self.records) - 1

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, year: object) -> bool:
        return isinstance(year, int) and 0 <= year - self.base_year < len(self.records)

    def record(self, year: int) -> ChineseYearRecord:
        if year not in self:
            first, last = self.year_range
            raise ChineseYearOutOfRangeError(f"Chinese year {year} outside table range {first}..{last}")
        return self.records[year - self.base_year]


@dataclass(frozen=True)
class ChineseYearData:
    table: Optional[ChineseCalendarTable] = None

    @property
    def kind(self) -> CalendarKind:
        return CalendarKind.CHINESE

    def _record(self, year: int) -> ChineseYearRecord:
        if self.table is None:
            raise ChineseCalendarUnavailableError("No Chinese calendar table installed")
        return self.table.record(year)

    def year_layout(self, year: int) -> YearLayout:
        rec = self._record(year)
        return YearLayout(_base_new_year(year) + rec.offset, rec.month_lengths())

    def intercalary_month(self, year: int) -> int:
        return self._record(year).leap_position

    def approx_year(self, jdn: int) -> int:
        year = cycle_year(jdn, CHINESE_CALENDAR_EPOCH + 90, 128, 46751)
        if self.table is not None and len(self.table):
            # Keep the first guess inside the table so edge years still resolve.
            first, last = self.table.year_range
            year = min(max(year, first), last)
        return year
