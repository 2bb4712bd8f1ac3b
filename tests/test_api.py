# tests/test_api.py

import logging
from unittest.mock import patch

import pytest

import calconv
from calconv.core.types import CalendarKind, FrenchLeapRule, ParseStatus, TimeFormat


def test_conversions_report_failure_values():
    assert calconv.to_jdn(1, 1, 2000) == 2451545
    assert calconv.to_jdn(1, 1, 2000, "hebrew") == calconv.to_jdn(1, 1, 2000, CalendarKind.HEBREW)
    assert calconv.to_jdn(1, 1, 2000, 42) == 0
    assert calconv.to_jdn(1, 14, 2000) == 0
    assert calconv.from_jdn(2451545) == (1, 1, 2000)
    assert calconv.from_jdn(2451545, 42) is None
    assert calconv.days_in_month(2, 2000) == 29
    assert calconv.days_in_month(0, 2000) == 0
    assert calconv.days_in_month(2, 4650, CalendarKind.CHINESE) == 0


def test_failures_are_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="calconv"):
        assert calconv.to_jdn(1, 1, 2000, "mayan") == 0
    assert any("to_jdn" in r.getMessage() for r in caplog.records)


def test_year_layout_raises():
    layout = calconv.year_layout(2024)
    assert layout.year_start_jdn == 2460311
    assert layout.year_length == 366
    with pytest.raises(calconv.UnsupportedCalendarError):
        calconv.year_layout(2024, 99)
    with pytest.raises(calconv.CalendarUnavailableError):
        calconv.year_layout(4650, CalendarKind.CHINESE)


def test_parse_datetime_and_parse_jd():
    t2k, status = calconv.parse_datetime(0.0, "2000 jan 2", TimeFormat.YMD)
    assert (t2k, status) == (0.5, ParseStatus.LOCAL)
    jd, status = calconv.parse_jd(2451545.0, "+1d")
    assert (jd, status) == (2451546.0, ParseStatus.LOCAL)
    jd, status = calconv.parse_jd(2451545.0, "nonsense")
    assert jd == 2451545.0 and status < 0
    # an unknown calendar code in the flags is a status, not an exception
    assert calconv.parse_datetime(7.5, "2000 jan 1", 9) == (7.5, ParseStatus.BAD_FORMAT)


def test_parse_uses_default_context_clock():
    # the autouse fixture pins the default clock to 2024-01-01 00:00 UTC
    t2k, status = calconv.parse_datetime(0.0, "now")
    assert status == ParseStatus.LOCAL
    assert t2k == pytest.approx(8765.5)


def test_split_time():
    st = calconv.split_time(0.25)
    assert (st.year, st.month, st.day, st.hour, st.minute) == (2000, 1, 1, 18, 0)
    assert st.second == pytest.approx(0.0, abs=1e-6)

    st = calconv.split_time(-0.5 + (13 * 3600 + 14 * 60 + 15.5) / 86400)
    assert (st.hour, st.minute) == (13, 14)
    assert st.second == pytest.approx(15.5, abs=1e-4)

    heb = calconv.split_time(-0.5, CalendarKind.HEBREW)
    assert (heb.year, heb.month, heb.day) == (5760, 4, 23)


def test_name_tables_on_default_context():
    assert calconv.set_month_name(1) == "Jan"
    assert calconv.set_month_name(13) is None
    calconv.set_month_name(13, "Leap")
    assert calconv.default_context().month_index("leap") == 13
    assert calconv.set_weekday_name(0, "Dimanche") == "Dimanche"
    assert calconv.default_context().weekday_index("dim") == 0
    with pytest.raises(ValueError):
        calconv.set_month_name(14, "x")
    with pytest.raises(ValueError):
        calconv.set_weekday_name(7)


def test_context_tweak_copies_tables():
    base = calconv.CalendarContext()
    other = base.tweak(french_rule=FrenchLeapRule.RULE_128)
    other.set_month_name(1, "Janvier")
    assert base.set_month_name(1) == "Jan"
    assert other.french_rule is FrenchLeapRule.RULE_128
    with pytest.raises(ValueError):
        calconv.CalendarContext(month_names=["Jan"] * 12)


def test_default_context_swap():
    mine = calconv.CalendarContext(clock=lambda: 0.0)
    calconv.set_default_context(mine)
    assert calconv.default_context() is mine
    t2k, _ = calconv.parse_datetime(0.0, "now")
    assert t2k == pytest.approx(-10957.5)


def test_now_with_patched_wall_clock():
    ctx = calconv.CalendarContext()
    # J2000.0 in Unix seconds
    with patch.object(ctx, "clock", return_value=946728000.0):
        assert ctx.now_t2k() == pytest.approx(0.0)


def test_find_nearest_lunar_phase():
    assert calconv.find_nearest_lunar_phase("nm", 5.0) == pytest.approx(5.2599, abs=0.01)
    assert calconv.find_nearest_lunar_phase(2, 20.0) == pytest.approx(19.695, abs=0.01)
    # the nearest occurrence, on either side
    assert calconv.find_nearest_lunar_phase("nm", 30.0) == pytest.approx(35.04, abs=0.02)
    with pytest.raises(ValueError):
        calconv.find_nearest_lunar_phase("xx", 0.0)
