"""
calconv.engines._arith
----------------------
Integer helpers shared by the year-data providers.
"""

from __future__ import annotations


def cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (the historical formulas assume it)."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def cycle_year(jdn: int, epoch: int, n_years: int, n_days: int) -> int:
    """
    Year estimate from an exact recurrence "n_years years == n_days days"
    counted from `epoch`. Good to within a year near New Year's Day.
    """
    days = jdn - epoch
    day_in_cycle = days % n_days
    return n_years * ((days - day_in_cycle) // n_days) + day_in_cycle * n_years // n_days
