# tests/conftest.py

import math

import pytest

import calconv
from calconv.core.time import SYNODIC_MONTH_DAYS
from calconv.engines.chinese import (
    CHINESE_CALENDAR_EPOCH, GREGORIAN_2000_CHINESE_YEAR, ChineseCalendarTable, ChineseYearRecord,
)

# 2000-02-05, Chinese New Year of year 4637
CHINESE_NEW_YEAR_4637 = 2451580

# Unix time of 2024-01-01 00:00 UTC
CLOCK_2024 = 1704067200.0


def _plain_new_year(year):
    return 365 * year + year // 4 + CHINESE_CALENDAR_EPOCH


def build_chinese_table(base_year=GREGORIAN_2000_CHINESE_YEAR, n_years=40):
    """
    A synthetic but self-consistent table: months follow mean lunations from
    the 4637 New Year, and a leap month is added whenever a 12-month year would
    let New Year drift too early against the solar year.
    """
    def boundary(k):
        return CHINESE_NEW_YEAR_4637 + math.floor(k * SYNODIC_MONTH_DAYS + 0.5)

    records = []
    k = 0
    for i in range(n_years):
        year = base_year + i
        n = 12
        if boundary(k + 12) - _plain_new_year(year + 1) < 20:
            n = 13
        lengths = [boundary(k + j + 1) - boundary(k + j) for j in range(n)]
        intercalary = 1 + year % 11 if n == 13 else 0
        records.append(ChineseYearRecord.from_layout(year, boundary(k), lengths, intercalary))
        k += n
    return ChineseCalendarTable.from_records(base_year, records)


@pytest.fixture(scope="session")
def chinese_table():
    return build_chinese_table()


@pytest.fixture
def ctx():
    """A fresh context whose wall clock is pinned to 2024-01-01."""
    return calconv.CalendarContext(clock=lambda: CLOCK_2024)


@pytest.fixture
def chinese_ctx(ctx, chinese_table):
    ctx.install_chinese_table(chinese_table)
    return ctx


@pytest.fixture(autouse=True)
def fresh_default_context():
    """Tests that touch the process-wide context must not leak into each other."""
    saved = calconv.default_context()
    calconv.set_default_context(calconv.CalendarContext(clock=lambda: CLOCK_2024))
    yield
    calconv.set_default_context(saved)
