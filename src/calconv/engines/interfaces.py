"""
calconv.engines.interfaces
--------------------------
Defines the boundary between the per-calendar year-data providers and the
orchestrating Calendar.

Standard Reference Frame:
All day counts are integer Julian Day Numbers (JDN). A provider never looks
at time of day; timestamps (days since J2000.0) are handled by core.time and
the parser.
"""

from __future__ import annotations

from typing import Protocol

from calconv.core.types import CalendarKind, YearLayout


class YearDataProvider(Protocol):
    """
    Pure year arithmetic for one calendar. Maps a signed proleptic year to the
    JDN of its New Year's Day plus its month lengths.
    """
    @property
    def kind(self) -> CalendarKind:
        ...

    def year_layout(self, year: int) -> YearLayout:
        """
        Returns a fresh layout for `year`. Consecutive layouts must tile the
        JDN axis: year_layout(y).next_year_start_jdn == year_layout(y + 1).year_start_jdn.
        """
        ...

    def approx_year(self, jdn: int) -> int:
        """O(1) estimate of the year containing `jdn`, off by at most one."""
        ...
