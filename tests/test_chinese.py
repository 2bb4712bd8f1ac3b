# tests/test_chinese.py

import random

import pytest

import calconv
from calconv.core.errors import ChineseCalendarUnavailableError, ChineseYearOutOfRangeError
from calconv.core.types import CalendarKind
from calconv.engines.chinese import ChineseCalendarTable, ChineseYearRecord
from calconv.engines.names import month_label

# 2000-02-05
CHINESE_NEW_YEAR_4637 = 2451580


def test_record_pack_unpack():
    rec = ChineseYearRecord(long_months=0b1010110101011, intercalary=4, offset=54)
    assert ChineseYearRecord.unpack(rec.pack()) == rec
    assert rec.pack() < (1 << 24)
    assert rec.leap_position == 5
    assert ChineseYearRecord(0, 0, 0).leap_position == 0

    with pytest.raises(ValueError):
        ChineseYearRecord(0, 13, 0)
    with pytest.raises(ValueError):
        ChineseYearRecord(0, 0, 146)


def test_record_month_lengths():
    rec = ChineseYearRecord(long_months=0b1, intercalary=0, offset=10)
    lengths = rec.month_lengths()
    assert len(lengths) == 13
    assert lengths[0] == 30
    assert lengths[1:12] == (29,) * 11
    assert lengths[12] == 0


def test_table_bytes_roundtrip(chinese_table):
    data = chinese_table.to_bytes()
    assert len(data) == 4 + 3 * len(chinese_table)
    assert ChineseCalendarTable.from_bytes(data) == chinese_table


def test_table_rejects_truncated_data(chinese_table):
    data = chinese_table.to_bytes()
    with pytest.raises(ValueError):
        ChineseCalendarTable.from_bytes(data[:-1])
    with pytest.raises(ValueError):
        ChineseCalendarTable.from_bytes(b"\x01")


def test_table_file_load(tmp_path, chinese_table, ctx):
    path = tmp_path / "chinese.dat"
    path.write_bytes(chinese_table.to_bytes())
    loaded = calconv.load_chinese_calendar_table(path, context=ctx)
    assert loaded == chinese_table
    assert ctx.chinese_table is loaded


def test_new_year_and_roundtrip(chinese_ctx, chinese_table):
    cal = chinese_ctx.calendar(CalendarKind.CHINESE)
    assert cal.new_year_jdn(4637) == CHINESE_NEW_YEAR_4637

    first, last = chinese_table.year_range
    lo, hi = cal.new_year_jdn(first), cal.new_year_jdn(last) - 1
    random.seed(42)
    for _ in range(2000):
        jdn = random.randint(lo, hi)
        d = cal.from_jdn(jdn)
        assert first <= d.year <= last
        assert cal.to_jdn(d.day, d.month, d.year) == jdn


def test_first_and_last_days_of_table(chinese_ctx, chinese_table):
    cal = chinese_ctx.calendar(CalendarKind.CHINESE)
    first, last = chinese_table.year_range
    start = cal.new_year_jdn(first)
    assert cal.from_jdn(start).as_tuple() == (1, 1, first)
    end = cal.year_layout(last).next_year_start_jdn - 1
    assert cal.from_jdn(end).year == last


def test_intercalary_detection(chinese_ctx, chinese_table):
    cal = chinese_ctx.calendar(CalendarKind.CHINESE)
    leap_years = 0
    for year in range(*chinese_table.year_range):
        rec = chinese_table.record(year)
        layout = cal.year_layout(year)
        if rec.intercalary:
            leap_years += 1
            assert layout.n_months == 13
            slot = cal.intercalary_month(year)
            assert slot == rec.intercalary + 1
            assert cal.month_label(slot, year) == (rec.intercalary, True)
            assert cal.month_label(slot + 1, year) == (rec.intercalary + 1, False)
            assert month_label(cal, slot, year) == f"{rec.intercalary}L"
            assert calconv.chinese_intercalary_month(year, context=chinese_ctx) == slot
        else:
            assert layout.n_months == 12
            assert cal.intercalary_month(year) == 0
            assert cal.days_in_month(13, year) == 0
    # about 7 leap years in 19
    assert 10 <= leap_years <= 18


def test_year_offsets_stay_in_range(chinese_table):
    for rec in chinese_table.records:
        assert 0 <= rec.offset <= 145


def test_missing_table_and_out_of_range(chinese_ctx):
    bare = calconv.CalendarContext()
    with pytest.raises(ChineseCalendarUnavailableError):
        bare.calendar(CalendarKind.CHINESE).to_jdn(1, 1, 4700)
    assert calconv.to_jdn(1, 1, 4650, CalendarKind.CHINESE, context=bare) == 0
    assert calconv.from_jdn(2460000, CalendarKind.CHINESE, context=bare) is None
    with pytest.raises(ChineseCalendarUnavailableError):
        calconv.chinese_intercalary_month(4650, context=bare)

    with pytest.raises(ChineseYearOutOfRangeError):
        chinese_ctx.calendar(CalendarKind.CHINESE).to_jdn(1, 1, 4000)


def test_install_and_unload(chinese_table):
    ctx = calconv.CalendarContext()
    calconv.install_chinese_calendar_table(chinese_table.to_bytes(), context=ctx)
    assert calconv.to_jdn(1, 1, 4637, "chinese", context=ctx) == CHINESE_NEW_YEAR_4637
    calconv.install_chinese_calendar_table(None, context=ctx)
    assert calconv.to_jdn(1, 1, 4637, "chinese", context=ctx) == 0
