"""
calconv.parsing.lunar_phase
---------------------------
Approximate times of the principal lunar phases (Meeus, Astronomical
Algorithms, ch. 49), truncated to terms above about a minute. With
cancellation the result is usually good to a minute or two, which is all a
"nm"/"fm" suffix in a date string needs.
"""

from __future__ import annotations

import math
from enum import IntEnum

from calconv.core.time import J2000, SYNODIC_MONTH_DAYS


class LunarPhase(IntEnum):
    NEW_MOON = 0
    FIRST_QUARTER = 1
    FULL_MOON = 2
    THIRD_QUARTER = 3

    @classmethod
    def from_code(cls, code: str) -> "LunarPhase":
        """'nm', '1q', 'fm' or '3q' (case-insensitive)."""
        try:
            return _CODES[code.lower()]
        except KeyError:
            raise ValueError(f"Unknown lunar phase code {code!r}") from None


_CODES = {
    "nm": LunarPhase.NEW_MOON,
    "1q": LunarPhase.FIRST_QUARTER,
    "fm": LunarPhase.FULL_MOON,
    "3q": LunarPhase.THIRD_QUARTER,
}

# Mean new moon of k = 0 (2000-01-06), days from J2000.0.
LUNAR_PHASE_T0 = 2451550.09765 - J2000

#   M'       M       2M'     2F      M'-M    M'+M    2M      M'-2F   M'+2F
_AMPLITUDES = (
    (-.40720, +.17241, +.01608, +.01039, +.00739, -.00514, +.00208, -.00111, -.00057),   # new
    (-.62801, +.17172, +.00862, +.00804, +.00454, -.01183, +.00204, -.00180, -.00070),   # quarters
    (-.40614, +.17302, +.01614, +.01043, +.00734, -.00515, +.00209, -.00111, -.00057),   # full
)

# Quarter-phase correction W, days.
_QUARTER_W = 0.00306


def phase_time(k: float, phase: LunarPhase) -> float:
    """
    Time (days from J2000.0) of the phase with lunation index `k`; k is an
    integer for new moons, +.25 / +.5 / +.75 for the other phases.
    """
    deg = math.pi / 180.0
    moon_ma = (201.5643 + 385.81693528 * k) * deg
    sun_ma = (2.5534 + 29.10535669 * k) * deg
    f = (160.7108 + 390.67050274 * k) * deg

    rval = LUNAR_PHASE_T0 + k * SYNODIC_MONTH_DAYS
    if phase == LunarPhase.FIRST_QUARTER:
        rval += _QUARTER_W
    if phase == LunarPhase.THIRD_QUARTER:
        rval -= _QUARTER_W
        amp = _AMPLITUDES[1]
    else:
        amp = _AMPLITUDES[int(phase)]

    args = (
        moon_ma,
        sun_ma,
        2.0 * moon_ma,
        2.0 * f,
        moon_ma - sun_ma,
        moon_ma + sun_ma,
        2.0 * sun_ma,
        moon_ma - 2.0 * f,
        moon_ma + 2.0 * f,
    )
    return rval + sum(a * math.sin(x) for a, x in zip(amp, args))


def find_nearest_lunar_phase(phase, t2k: float) -> float:
    """Time of the occurrence of `phase` nearest to `t2k` (days from J2000.0)."""
    phase = LunarPhase(int(phase)) if not isinstance(phase, str) else LunarPhase.from_code(phase)
    frac = int(phase) * 0.25
    k = math.floor((t2k - LUNAR_PHASE_T0) / SYNODIC_MONTH_DAYS - frac + 0.5) + frac
    return phase_time(k, phase)
