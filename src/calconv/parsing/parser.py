"""
calconv.parsing.parser
----------------------
Best-effort date/time text parser.

Turns loosely formatted human input ("25 dec 1980", "2009-03-05T12:34:56",
"jd 2451545", "now -3h", "2024 mar 1 fm", "tue") into a timestamp in days from
J2000.0. Parsing is relative to a base timestamp: fields the text leaves out
are taken from it, and offsets are added to it.

The stages run in a fixed order:

  1. length check, lower-casing, letter/digit spacing
  2. trailing offsets ("+3h -10m"), summed and applied once at the end
  3. trailing lunar phase code (nm, 1q, fm, 3q) with an optional day count
  4. AD / BC markers
  5. absolute forms: jd, y, mjd, gps, unix, now, empty text
  6. d.m.y with dots, ISO 8601 / FITS date-times
  7. am/pm and a trailing H:M:S time of day
  8. date fields split on '-', '/' or ' ', or a single token
  9. resolution through the calendar selected in the format flags

A failure never yields a partial result: the caller gets its own base
timestamp back together with a negative ParseStatus.
"""

from __future__ import annotations

import logging
import math
import re
from typing import List, NamedTuple, Optional, Tuple

from calconv.core.context import CalendarContext, default_context
from calconv.core.errors import CalendarUnavailableError, UnsupportedCalendarError
from calconv.core.time import (
    J2000, J2000_JDN, JD_GPS_EPOCH, JD_UNIX_EPOCH, MINUTES_PER_DAY, MJD_OFFSET,
    SECONDS_PER_DAY, decimal_year_to_t2k,
)
from calconv.core.types import CalendarKind, ParseStatus, TimeFormat, calendar_from_flags
from calconv.engines.calendar import Calendar

from .lunar_phase import LunarPhase, find_nearest_lunar_phase
from .normalize import NUMBER, collect_time_offsets, normalize_text, strip_era

logger = logging.getLogger(__name__)

# Texts of 80 characters or more are rejected outright.
MAX_TEXT_LEN = 79

# Seconds per (Julian) year, as used for the current-year estimate.
_SECONDS_PER_YEAR = 1461 * 86400 // 4

_FLOAT = r"[+-]?" + NUMBER

_PHASE = re.compile(r"^(.*?)\s*(nm|1q|fm|3q)(?:\s*(" + _FLOAT + r"))?$")
_JD = re.compile(r"^jd?\s*(" + _FLOAT + ")")
_DECIMAL_YEAR = re.compile(r"^y\s*(" + _FLOAT + ")")
_BARE_PREFIX = re.compile(r"^(?:jd?|y)(?: |$)")
_BARE_PREFIX = re.compile(r"^(?:jd?|y)(?: |$)")
_MJD = re.compile(r"^mjd\s*(" + _FLOAT + ")")
_GPS = re.compile(r"^gps (\d{5})(?!\d)")
_UNIX = re.compile(r"^unix (" + _FLOAT + ")")
_DOTTED_DMY = re.compile(r"^[+-]?\d+\.[+-]?\d+\.[+-]?\d+")
_ISO_EXTENDED = re.compile(
    r"^([+-]?\d{4,})-(\d{1,2})-(\d{1,2}) t (\d{1,2}):(\d{1,2})(?::(" + NUMBER + r"))?(?: z)?$"
)
_ISO_BASIC = re.compile(r"^(\d{4})(\d{2})(\d{2}) t (\d{2})(\d{2})(\d{2}(?:\.\d*)?)?(?: z)?$")
_CLOCK = re.compile(r"([+-]?\d+)(?::(" + _FLOAT + r")(?::(" + _FLOAT + r"))?)?")
_MINUTE_SECOND = re.compile(r"(" + _FLOAT + r")(?::(" + _FLOAT + r"))?")
_LEADING_FLOAT = re.compile(r"\s*(" + _FLOAT + ")")
_LEADING_INT = re.compile(r"\s*[+-]?\d+")

_AM_PM = ((" am", False), (" a.m.", False), (" pm", True), (" p.m.", True))


class ParseResult(NamedTuple):
    t2k: float
    status: ParseStatus

    @property
    def ok(self) -> bool:
        return self.status.ok


class ParseFailure(Exception):
    """Internal: aborts a parse with a negative status."""

    def __init__(self, status: ParseStatus, reason: str):
        super().__init__(reason)
        self.status = status


def _leading_float(text: str) -> Optional[float]:
    """Like C's strtod: the number at the start of `text`, None if there is none."""
    m = _LEADING_FLOAT.match(text)
    return float(m.group(1)) if m else None


class _Fields:
    """Date and time-of-day fields being assembled, seeded from the base time."""

    def __init__(self, year: int, month: int, day: float, hour: int, minute: int, second: float):
        self.year = year
        self.month = month
        self.day = day
        self.hour = hour
        self.minute = minute
        self.second = second


class DateTimeParser:
    """
    One parse configuration: a context (name tables, clock, calendar policies)
    and the format flags. Reusable; holds no per-parse state.
    """

    def __init__(self, context: CalendarContext, flags: int = 0):
        self.context = context
        self.flags = int(flags)

    @property
    def kind(self) -> CalendarKind:
        """Calendar code from the low nibble of the flags; raises for an unknown code."""
        return calendar_from_flags(self.flags)

    @property
    def max_month(self) -> int:
        return self.kind.max_month

    @property
    def calendar(self) -> Calendar:
        return self.context.calendar(self.kind)

    def _flag(self, flag: TimeFormat) -> bool:
        return bool(self.flags & flag)

    # ---------------------------------------------------------
    # Entry point
    # ---------------------------------------------------------

    def parse(self, base_t2k: float, text: str) -> ParseResult:
        try:
            t2k, is_utc = self._parse_text(base_t2k, text)
        except ParseFailure as e:
            logger.debug("could not parse %r: %s (%s)", text, e.status.name, e)
            return ParseResult(base_t2k, e.status)
        except UnsupportedCalendarError as e:
            logger.debug("could not parse %r: %s", text, e)
            return ParseResult(base_t2k, ParseStatus.BAD_FORMAT)
        except UnsupportedCalendarError as e:
            logger.debug("could not parse %r: %s", text, e)
            return ParseResult(base_t2k, ParseStatus.BAD_FORMAT)
        except CalendarUnavailableError as e:
            logger.debug("could not parse %r: %s", text, e)
            return ParseResult(base_t2k, ParseStatus.CALENDAR_UNAVAILABLE)
        return ParseResult(t2k, ParseStatus.UTC if is_utc else ParseStatus.LOCAL)

    def _parse_text(self, base_t2k: float, text: str) -> Tuple[float, bool]:
        text = text.lstrip(" ")
        if not text or len(text) > MAX_TEXT_LEN:
            raise ParseFailure(ParseStatus.EMPTY_OR_TOO_LONG, f"text length {len(text)}")
        return self._parse_normalized(base_t2k, normalize_text(text))

    def _parse_normalized(self, base_t2k: float, s: str) -> Tuple[float, bool]:
        s, offset = collect_time_offsets(s)
        s = s.rstrip(" ")

        m = _PHASE.match(s)
        if m:
            t2k, _ = self._parse_normalized(base_t2k, m.group(1))
            t2k = find_nearest_lunar_phase(LunarPhase.from_code(m.group(2)), t2k)
            if m.group(3):
                t2k += float(m.group(3))
            return t2k + offset, True

        s, is_bc = strip_era(s)

        if s.startswith("now"):
            # "now" only replaces the base; the rest is parsed against it.
            s = s[3:].lstrip(" ")
            base_t2k = self.context.now_t2k()

        absolute = self._absolute(base_t2k, s)
        if absolute is not None:
            t2k, is_utc = absolute
        else:
            t2k, is_utc = self._parse_date(base_t2k, s, is_bc)
        return t2k + offset, is_utc

    # ---------------------------------------------------------
    # Absolute forms
    # ---------------------------------------------------------

    def _absolute(self, base_t2k: float, s: str) -> Optional[Tuple[float, bool]]:
        """(t2k, is_utc) for the forms that name an instant outright, else None."""
        if not s:
            return base_t2k, False

        m = _MJD.match(s)
        if m:
            return float(m.group(1)) + MJD_OFFSET - J2000, True
        if s.startswith("mjd"):
            raise ParseFailure(ParseStatus.BAD_FORMAT, "mjd without a number")

        m = _JD.match(s)
        if m:
            return float(m.group(1)) - J2000, True

        m = _DECIMAL_YEAR.match(s)
        if m:
            return decimal_year_to_t2k(float(m.group(1))), False
        if _BARE_PREFIX.match(s):
            raise ParseFailure(ParseStatus.BAD_FORMAT, f"{s!r} without a number")
        if _BARE_PREFIX.match(s):
            raise ParseFailure(ParseStatus.BAD_FORMAT, f"{s!r} without a number")

        if s.startswith("gps"):
            m = _GPS.match(s)
            if m is None:
                raise ParseFailure(ParseStatus.BAD_FORMAT, "gps needs a five-digit WWWWD number")
            week_and_day = int(m.group(1))
            days = (week_and_day // 10) * 7 + week_and_day % 10
            return days + JD_GPS_EPOCH - J2000, False

        if s.startswith("unix"):
            m = _UNIX.match(s)
            if m is None:
                raise ParseFailure(ParseStatus.BAD_FORMAT, "unix without a number of seconds")
            return float(m.group(1)) / SECONDS_PER_DAY + (JD_UNIX_EPOCH - J2000), False

        return None

    # ---------------------------------------------------------
    # Calendar dates
    # ---------------------------------------------------------

    def _parse_date(self, base_t2k: float, s: str, is_bc: bool) -> Tuple[float, bool]:
        m = _DOTTED_DMY.match(s)
        if m:
            s = m.group(0).replace(".", "/") + s[m.end():]

        base = self.calendar.split_time(base_t2k)
        f = _Fields(base.year, base.month, float(base.day), base.hour, base.minute, base.second)

        iso = _ISO_EXTENDED.match(s) or _ISO_BASIC.match(s)
        if iso:
            year, month, day, hour, minute, sec = iso.groups()
            f.year, f.month, f.day = int(year), int(month), float(day)
            f.hour, f.minute, f.second = int(hour), int(minute), float(sec or 0.0)
        else:
            s = self._parse_time_of_day(s, f)
            early = self._parse_date_fields(base_t2k, s, f, is_bc)
            if early is not None:
                return early

        return self._resolve(f, is_bc), False

    def _parse_time_of_day(self, s: str, f: _Fields) -> str:
        """
        Reads a trailing H:M:S token into `f` and returns the text before it.
        A lone ':' keeps the base time; ':M:S' keeps the base hour; anything
        else resets the time of day to midnight.
        """
        pm: Optional[bool] = None
        if len(s) >= 4:
            for marker, is_pm in _AM_PM:
                pos = s.find(marker)
                if pos >= 0:
                    s = s[:pos] + s[pos + len(marker):]
                    pm = is_pm
                    break

        i = len(s)
        while i and s[i - 1] != " " and not s[i - 1].isalpha():
            i -= 1
        token = s[i:]
        colon_found = ":" in token

        if token != ":":
            saved_hour = f.hour
            f.hour = f.minute = 0
            f.second = 0.0
            if colon_found:
                if not token.startswith(":"):
                    m = _CLOCK.match(token)
                    if m:
                        f.hour = int(m.group(1))
                        f.second = float(m.group(3) or 0.0) + float(m.group(2) or 0.0) * 60.0
                    if pm is False and f.hour == 12:
                        f.hour = 0
                    if pm is True and f.hour != 12:
                        f.hour += 12
                else:
                    f.hour = saved_hour
                    m = _MINUTE_SECOND.match(token, 1)
                    if m:
                        f.second = float(m.group(2) or 0.0) + float(m.group(1)) * 60.0

        if colon_found:
            s = s[:i - 1] if i else ""
        return s

    def _parse_date_fields(self, base_t2k: float, s: str, f: _Fields, is_bc: bool) -> Optional[Tuple[float, bool]]:
        """
        Fills the date in `f` from the text left after the time of day. A bare
        decimal year or 7-digit JD is a complete answer and is returned as
        (t2k, is_utc) instead.
        """
        if not s:
            return None
        i = 1
        while i < len(s) and s[i] not in "-:/ ":
            i += 1
        symbol = s[i] if i < len(s) else ""

        if symbol == ":":
            return None
        if symbol:
            self._parse_split_fields(s, i, symbol, f, is_bc)
            return None
        return self._parse_single_token(base_t2k, s, f)

    def _field_value(self, text: str, position: int) -> float:
        value = _leading_float(text)
        if value is None:
            raise ParseFailure(ParseStatus.BAD_FIELD, f"date field {position} ({text!r}) is neither a number nor a month")
        return value

    def _parse_split_fields(self, s: str, i: int, symbol: str, f: _Fields, is_bc: bool) -> None:
        ctx = self.context
        values: List[float] = [0.0, 0.0, 0.0]
        month_found = day_found = year_found = 0
        n_fields = 2

        first = s[:i]
        idx = ctx.month_index(first)
        if idx:
            month_found = 1
            values[0] = float(idx)
        else:
            values[0] = self._field_value(first, 1)
            if "." in first:
                day_found = 1

        s = s[i + 1:]
        j = 0
        while j < len(s) and s[j] != symbol and s[j] != " ":
            j += 1
        second, s = s[:j], s[j:]
        idx = ctx.month_index(second)
        if idx:
            month_found = 2
            values[1] = float(idx)
        else:
            values[1] = self._field_value(second, 2)
            if "." in second:
                day_found = 2

        if s.startswith(symbol):
            s = s[1:]
            words = s.split()
            third = words[0] if words else ""
            if third:
                idx = ctx.month_index(third)
                if idx:
                    month_found = 3
                    n_fields = 3
                    values[2] = float(idx)
                elif _leading_float(s) is None:
                    raise ParseFailure(ParseStatus.BAD_FIELD, f"date field 3 ({third!r}) is neither a number nor a month")
            if n_fields == 2:
                m = _LEADING_FLOAT.match(s)
                if m and not s[m.end():].startswith(":"):
                    values[2] = float(m.group(1))
                    if "." in third:
                        day_found = 3
                    n_fields = 3

        # A negative field is the year; otherwise the largest field above 32.
        for k in range(n_fields):
            if values[k] < 0.0:
                year_found = k + 1
                break
            if values[k] > 32.0 and (not year_found or values[k] > values[year_found - 1]):
                year_found = k + 1
        # Too big for a month but small enough for a day.
        if year_found or n_fields == 2:
            for k in range(n_fields):
                if self.max_month + .0001 < values[k] < 32.0 and k + 1 != year_found:
                    day_found = k + 1

        month_day = self._flag(TimeFormat.MONTH_DAY)
        if n_fields == 2:
            if month_found:
                other = values[2 - month_found]
                f.month = int(values[month_found - 1])
                if .999 < other < 32.0:
                    f.day = other
                else:
                    f.year = int(other)
            elif year_found:
                # year and day of year
                f.year = int(values[year_found - 1])
                f.month = 1
                f.day = values[2 - year_found]
            elif day_found:
                f.day = values[day_found - 1]
                f.month = int(values[2 - day_found])
            elif month_day:
                f.month, f.day = int(values[0]), float(int(values[1]))
            else:
                f.month, f.day = int(values[1]), float(int(values[0]))
        else:
            year_first = self._flag(TimeFormat.YEAR_FIRST)
            if not year_found:
                if not month_found:
                    if not day_found or day_found == 2:
                        year_found = 1 if year_first else 3
                        if not day_found:
                            # nothing identified itself: the flags decide
                            day_found = 2 if year_first else 1
                            if month_day:
                                day_found += 1
                    else:
                        year_found = 4 - day_found
                elif not day_found:
                    if month_found == 2:
                        year_found = 1 if year_first else 3
                    else:
                        year_found = 4 - month_found
                else:
                    year_found = 6 - month_found - day_found
            elif not month_found and not day_found:
                if month_day:
                    month_found = 2 if year_found == 1 else 1
                else:
                    day_found = 2 if year_found == 1 else 1

            # The three positions sum to 6.
            if not day_found:
                day_found = 6 - year_found - month_found
            elif not month_found:
                month_found = 6 - year_found - day_found
            if sorted((year_found, month_found, day_found)) != [1, 2, 3]:
                raise ParseFailure(ParseStatus.BAD_FIELD, "cannot tell day, month and year apart")

            f.year = math.floor(values[year_found - 1] + .5)
            f.day = values[day_found - 1]
            f.month = int(values[month_found - 1] + .5)

        if 0 < f.year < 100 and not is_bc and self._flag(TimeFormat.TWO_DIGIT_YEAR):
            # Two-digit years fall between 60 years back and 40 years ahead.
            curr_year = 1970 + int(self.context.clock()) // _SECONDS_PER_YEAR
            f.year += 1900
            while f.year < curr_year - 60:
                f.year += 100

    def _parse_single_token(self, base_t2k: float, s: str, f: _Fields) -> Optional[Tuple[float, bool]]:
        ctx = self.context
        idx = ctx.month_index(s)
        if idx:
            f.month = idx
            return None
        weekday = ctx.weekday_index(s)
        if weekday >= 0:
            # Nearest such weekday, up to three days either side (t2k 0 is a Saturday).
            shift = weekday - math.floor(base_t2k + 6.5) % 7
            if shift < -3:
                shift += 7
            elif shift > 3:
                shift -= 7
            f.day += shift
            return None

        m = _LEADING_INT.match(s)
        if m is None:
            raise ParseFailure(ParseStatus.BAD_NUMBER, f"{s!r} is not a number")
        n_chars = m.end()
        ival = int(m.group(0))
        value = float(ival)
        rest = s[n_chars:]
        if rest.startswith("."):
            frac = re.match(r"\.\d+", rest)
            if frac:
                value += float(frac.group(0))

        if n_chars in (1, 2):
            f.day = value
        elif n_chars == 3:
            # day of year
            f.day = value
            f.month = 1
        elif n_chars in (4, 5):
            if value != ival:
                return decimal_year_to_t2k(value), False
            f.year, f.month, f.day = ival, 1, 1.0
        elif n_chars == 7:
            return value - J2000, True
        elif n_chars in (6, 8):
            # YYMMDD or YYYYMMDD
            f.year = ival // 10000
            if n_chars == 6:
                f.year += 2000 if f.year < 40 else 1900
            f.month = (ival // 100) % 100
            f.day = float(ival % 100) + (value - ival)
        else:
            raise ParseFailure(ParseStatus.BAD_NUMBER, f"{n_chars}-digit number {s!r}")
        return None

    # ---------------------------------------------------------
    # Resolution
    # ---------------------------------------------------------

    def _resolve(self, f: _Fields, is_bc: bool) -> float:
        year = 1 - f.year if is_bc else f.year
        cal = self.calendar
        if not (1 <= f.month <= 13) or cal.days_in_month(f.month, year) == 0:
            raise ParseFailure(ParseStatus.BAD_FIELD, f"month {f.month} does not exist in {self.kind.name} year {year}")
        iday = int(f.day)
        frac = f.day - iday
        jdn = cal.to_jdn(iday, f.month, year)
        return ((jdn - J2000_JDN) + frac - .5
                + (f.hour * 60 + f.minute) / MINUTES_PER_DAY
                + f.second / SECONDS_PER_DAY)


def parse_time(base_t2k: float, text: str, flags: int = 0, *, context: Optional[CalendarContext] = None) -> ParseResult:
    """
    Parses `text` relative to `base_t2k` (days from J2000.0).

    `flags` is a TimeFormat combination with a CalendarKind code in the low
    nibble. Returns ParseResult(t2k, status); on failure t2k is `base_t2k`.
    """
    ctx = context if context is not None else default_context()
    return DateTimeParser(ctx, flags).parse(base_t2k, text)
