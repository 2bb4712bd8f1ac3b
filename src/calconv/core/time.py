from __future__ import annotations
import math
from datetime import date

# J2000.0 = 2000-01-01 12:00 = JD 2451545.0; timestamps ("t2k") count days from it.
J2000 = 2451545.0
J2000_JDN = 2451545

JD_UNIX_EPOCH = 2440587.5   # 1970-01-01 00:00 UTC
JD_GPS_EPOCH = 2444244.5    # 1980-01-06 00:00 UTC
MJD_OFFSET = 2400000.5

SECONDS_PER_DAY = 86400.0
MINUTES_PER_DAY = 1440
MINUTES_PER_HOUR = 60

JULIAN_YEAR_DAYS = 365.25
JULIAN_CENTURY_DAYS = 36525.0
SYNODIC_MONTH_DAYS = 29.530588853

_ORDINAL_TO_JDN = 1721425


def jd_to_t2k(jd: float) -> float:
    return jd - J2000


def t2k_to_jd(t2k: float) -> float:
    return t2k + J2000


def t2k_to_jdn(t2k: float) -> int:
    """JDN of the civil day containing the timestamp (days start at midnight)."""
    return int(math.floor(t2k + 0.5)) + J2000_JDN


def jdn_to_t2k(jdn: int) -> float:
    """Timestamp of midnight starting the given JDN."""
    return float(jdn - J2000_JDN) - 0.5


def unix_to_t2k(seconds: float) -> float:
    return seconds / SECONDS_PER_DAY + (JD_UNIX_EPOCH - J2000)


def decimal_year_to_t2k(year: float) -> float:
    """Julian-year decimal year: 2000.0 is 2000-01-01 00:00."""
    return (year - 2000.0) * JULIAN_YEAR_DAYS - 0.5


def date_to_jdn(d: date) -> int:
    """Proleptic Gregorian datetime.date -> JDN."""
    return d.toordinal() + _ORDINAL_TO_JDN


def jdn_to_date(jdn: int) -> date:
    """JDN -> proleptic Gregorian datetime.date (years 1..9999 only)."""
    return date.fromordinal(jdn - _ORDINAL_TO_JDN)
