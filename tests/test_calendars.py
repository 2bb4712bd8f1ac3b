# tests/test_calendars.py

import random
from datetime import date

import pytest

from calconv.core.context import CalendarContext
from calconv.core.time import date_to_jdn
from calconv.core.types import CalendarKind, FrenchLeapRule, PersianRule
from calconv.engines.calendar import GREGORIAN_SWITCHOVER_JDN
from calconv.engines.french import french_new_year
from calconv.engines.gregorian import is_gregorian_leap_year, is_julian_leap_year
from calconv.engines.hebrew import VALID_YEAR_LENGTHS, tishri_1
from calconv.engines.islamic import is_islamic_leap_year
from calconv.engines.persian import is_persian_leap_year, jalaali_jd0, modern_persian_jd0, persian_new_year

ARITHMETIC_KINDS = [k for k in CalendarKind if k != CalendarKind.CHINESE]


def test_jdn_civil_roundtrip_all_calendars():
    """JDN -> civil date -> JDN over a wide window, every arithmetic calendar."""
    ctx = CalendarContext()
    random.seed(42)
    for kind in ARITHMETIC_KINDS:
        cal = ctx.calendar(kind)
        for _ in range(2000):
            jdn = random.randint(1000000, 3000000)
            d = cal.from_jdn(jdn)
            assert 1 <= d.month <= 13
            assert 1 <= d.day <= cal.days_in_month(d.month, d.year)
            assert cal.to_jdn(d.day, d.month, d.year) == jdn, (kind, jdn, d)


def test_jdn_civil_roundtrip_proleptic_years():
    """Same round trip far before every epoch, into negative years."""
    ctx = CalendarContext()
    random.seed(42)
    for kind in ARITHMETIC_KINDS:
        cal = ctx.calendar(kind)
        for _ in range(2000):
            jdn = random.randint(-3000000, 1000000)
            d = cal.from_jdn(jdn)
            assert 1 <= d.day <= cal.days_in_month(d.month, d.year)
            assert cal.to_jdn(d.day, d.month, d.year) == jdn, (kind, jdn, d)
        assert cal.from_jdn(-3000000).year < 0


def test_year_layouts_tile_the_day_axis():
    ctx = CalendarContext()
    random.seed(42)
    for kind in ARITHMETIC_KINDS:
        if kind == CalendarKind.JULIAN_GREGORIAN:
            continue
        cal = ctx.calendar(kind)
        y0 = cal.from_jdn(random.randint(1500000, 2800000)).year
        for y in range(y0, y0 + 50):
            layout = cal.year_layout(y)
            assert len(layout.month_lengths) == 13
            assert all(n >= 0 for n in layout.month_lengths)
            assert layout.next_year_start_jdn == cal.year_layout(y + 1).year_start_jdn


def test_gregorian_and_julian_leap_rules():
    assert is_gregorian_leap_year(2000)
    assert not is_gregorian_leap_year(1900)
    assert is_gregorian_leap_year(2024)
    assert is_julian_leap_year(1900)
    assert is_gregorian_leap_year(0) and is_julian_leap_year(0)

    ctx = CalendarContext()
    assert ctx.calendar(CalendarKind.GREGORIAN).days_in_month(2, 1900) == 28
    assert ctx.calendar(CalendarKind.JULIAN).days_in_month(2, 1900) == 29
    assert ctx.calendar(CalendarKind.GREGORIAN).days_in_month(13, 2000) == 0


def test_gregorian_matches_datetime():
    cal = CalendarContext().calendar(CalendarKind.GREGORIAN)
    random.seed(42)
    for _ in range(1000):
        d = date.fromordinal(random.randint(1, 3000000))
        assert cal.to_jdn(d.day, d.month, d.year) == date_to_jdn(d)
    assert cal.to_jdn(1, 1, 2000) == 2451545


def test_day_overflow_rolls_into_next_month():
    cal = CalendarContext().calendar(CalendarKind.GREGORIAN)
    assert cal.to_jdn(31, 4, 2024) == cal.to_jdn(1, 5, 2024)
    assert cal.to_jdn(0, 3, 2024) == cal.to_jdn(29, 2, 2024)


def test_julian_gregorian_cutover():
    cal = CalendarContext().calendar(CalendarKind.JULIAN_GREGORIAN)
    assert cal.to_jdn(4, 10, 1582) == GREGORIAN_SWITCHOVER_JDN
    assert cal.to_jdn(15, 10, 1582) == GREGORIAN_SWITCHOVER_JDN + 1
    assert cal.from_jdn(GREGORIAN_SWITCHOVER_JDN).as_tuple() == (4, 10, 1582)
    assert cal.from_jdn(GREGORIAN_SWITCHOVER_JDN + 1).as_tuple() == (15, 10, 1582)
    assert cal.from_jdn(GREGORIAN_SWITCHOVER_JDN + 1).calendar == CalendarKind.JULIAN_GREGORIAN

    # Julian leap day before the reform, Gregorian rules after it
    assert cal.days_in_month(2, 1500) == 29
    assert cal.days_in_month(2, 1700) == 28
    julian = CalendarContext().calendar(CalendarKind.JULIAN)
    assert cal.to_jdn(1, 1, 1000) == julian.to_jdn(1, 1, 1000)


def test_hebrew_reference_dates():
    ctx = CalendarContext()
    heb = ctx.calendar(CalendarKind.HEBREW)
    greg = ctx.calendar(CalendarKind.GREGORIAN)

    assert heb.new_year_jdn(5750) == 2447800 == greg.to_jdn(30, 9, 1989)
    assert tishri_1(5750) == 2447800
    assert heb.to_jdn(14, 8, 5730) == greg.to_jdn(20, 4, 1970)     # 14 Nisan
    assert heb.to_jdn(16, 12, 5748) == greg.to_jdn(30, 7, 1988)    # 16 Av


def test_hebrew_year_lengths_and_leap_months():
    heb = CalendarContext().calendar(CalendarKind.HEBREW)
    for y in range(5600, 5900):
        layout = heb.year_layout(y)
        assert layout.year_length in VALID_YEAR_LENGTHS
        leap = layout.year_length > 380
        assert layout.n_months == heb.months_in_year(y) == (13 if leap else 12)
        assert (layout.month_lengths[6] != 0) == leap


def test_islamic_calendar():
    cal = CalendarContext().calendar(CalendarKind.ISLAMIC)
    assert cal.to_jdn(1, 1, 1445) == 2460145
    leap_years = [y for y in range(1, 31) if is_islamic_leap_year(y)]
    assert leap_years == [2, 5, 7, 10, 13, 16, 18, 21, 24, 26, 29]
    assert sum(cal.days_in_year(y) for y in range(1, 31)) == 10631


def test_persian_new_year_both_kinds():
    ctx = CalendarContext()
    assert ctx.calendar(CalendarKind.PERSIAN).to_jdn(1, 1, 1403) == 2460390
    assert ctx.calendar(CalendarKind.MODERN_PERSIAN).to_jdn(1, 1, 1403) == 2460390
    assert jalaali_jd0(1403) == modern_persian_jd0(1403) == 2460390

    cal = ctx.calendar(CalendarKind.PERSIAN)
    layout = cal.year_layout(1403)
    assert layout.month_lengths[:6] == (31,) * 6
    assert layout.month_lengths[6:11] == (30,) * 5
    assert layout.month_lengths[12] == 0
    assert layout.year_length in (365, 366)
    assert is_persian_leap_year(1403) and not is_persian_leap_year(1402)
    for y in range(1300, 1500):
        assert is_persian_leap_year(y) == (cal.days_in_year(y) == 366)


def test_persian_outside_table_uses_arithmetic_rule():
    assert persian_new_year(3000, PersianRule.ASTRONOMICAL) == modern_persian_jd0(3000)
    with pytest.raises(ValueError):
        jalaali_jd0(3000)
    # the table edge still tiles
    cal = CalendarContext().calendar(CalendarKind.PERSIAN)
    assert cal.year_layout(2327).next_year_start_jdn == cal.year_layout(2328).year_start_jdn


def test_french_revolutionary_calendar():
    ctx = CalendarContext()
    cal = ctx.calendar(CalendarKind.FRENCH_REVOLUTIONARY)
    greg = ctx.calendar(CalendarKind.GREGORIAN)
    assert cal.to_jdn(1, 1, 1) == 2375840 == greg.to_jdn(22, 9, 1792)
    assert [y for y in range(1, 17) if cal.days_in_year(y) == 366] == [3, 7, 11, 15]
    assert cal.days_in_month(13, 3) == 6
    assert cal.days_in_month(13, 4) == 5
    assert cal.days_in_month(1, 4) == 30


@pytest.mark.parametrize("rule", list(FrenchLeapRule))
def test_french_rules_are_contiguous(rule):
    ctx = CalendarContext(french_rule=rule)
    cal = ctx.calendar(CalendarKind.FRENCH_REVOLUTIONARY)
    for y in range(-50, 400):
        assert cal.days_in_year(y) in (365, 366)
        assert french_new_year(y + 1, rule) == cal.year_layout(y).next_year_start_jdn


def test_context_policy_change_rebuilds_calendars():
    ctx = CalendarContext()
    table_cal = ctx.calendar(CalendarKind.FRENCH_REVOLUTIONARY)
    ctx.french_rule = FrenchLeapRule.FOUR_YEAR
    assert ctx.calendar(CalendarKind.FRENCH_REVOLUTIONARY) is not table_cal
    assert ctx.calendar(CalendarKind.HEBREW) is ctx.calendar("hebrew")


def test_unknown_calendar_and_month():
    from calconv.core.errors import UnsupportedCalendarError

    ctx = CalendarContext()
    with pytest.raises(UnsupportedCalendarError):
        ctx.calendar(9)
    with pytest.raises(UnsupportedCalendarError):
        ctx.calendar("mayan")
    with pytest.raises(ValueError):
        ctx.calendar(CalendarKind.GREGORIAN).to_jdn(1, 14, 2000)
