"""
calconv.parsing.normalize
-------------------------
Text clean-up steps that run before any date field is looked at: letter/digit
spacing, trailing time offsets ("+3h", "-10m") and era markers (AD/BC).
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from calconv.core.time import JULIAN_CENTURY_DAYS, JULIAN_YEAR_DAYS, SECONDS_PER_DAY, SYNODIC_MONTH_DAYS

# A C-style unsigned decimal: "12", "12.", "12.5", ".5" (exponents never
# survive normalize_text, which splits "1e3" into "1 e 3").
NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"

OFFSET_UNITS = {
    "s": 1.0 / SECONDS_PER_DAY,
    "m": 1.0 / 1440.0,
    "h": 1.0 / 24.0,
    "d": 1.0,
    "w": 7.0,
    "l": SYNODIC_MONTH_DAYS,     # lunation
    "y": JULIAN_YEAR_DAYS,
    "c": JULIAN_CENTURY_DAYS,
}

_LETTER_DIGIT = re.compile(r"(?<=[0-9])(?=[a-pr-z])|(?<=[a-z])(?=[0-9])")
_UNIT_OFFSET = re.compile(r"([+-]" + NUMBER + r") +([smhdwlyc])$")
_SIGNED_NUMBER = re.compile(r"[+-]" + NUMBER)


def normalize_text(text: str) -> str:
    """
    Lower-case and split letter/digit runs: "11Nov1918" -> "11 nov 1918".
    A digit followed by 'q' stays joined so the phase codes "1q"/"3q" survive.
    """
    return _LETTER_DIGIT.sub(" ", text.lower()).rstrip(" ")


def collect_time_offset(text: str) -> Optional[Tuple[str, float]]:
    """
    Removes the last trailing offset from `text`.

    Returns (remaining_text, offset_days), or None when the text does not end
    in an offset. "+0" counts as an offset (of zero days).
    """
    if len(text) <= 1:
        return None
    if text[-1] in OFFSET_UNITS and text[-2] == " ":
        m = _UNIT_OFFSET.search(text)
        if m is None:
            return None
        return text[:m.start()].rstrip(" "), float(m.group(1)) * OFFSET_UNITS[m.group(2)]
    if text[0] in "+-" and _SIGNED_NUMBER.fullmatch(text):
        # The whole string is a day count.
        return "", float(text)
    return None


def collect_time_offsets(text: str) -> Tuple[str, float]:
    """Strips every trailing offset; returns the remaining text and their sum."""
    total = 0.0
    while text:
        found = collect_time_offset(text)
        if found is None:
            break
        text, days = found
        total += days
    return text, total


def _remove_first(text: str, sub: str) -> Tuple[str, bool]:
    pos = text.find(sub)
    if pos < 0:
        return text, False
    return text[:pos] + text[pos + len(sub):], True


def strip_era(text: str) -> Tuple[str, bool]:
    """
    Drops "ad"/"a.d." and "bc"/"b.c." wherever they appear. Returns the
    remaining text and whether a BC marker was present.
    """
    text, _ = _remove_first(text, "ad")
    text, _ = _remove_first(text, "a.d.")
    text, is_bc = _remove_first(text, "bc")
    if not is_bc:
        text, is_bc = _remove_first(text, "b.c.")
    # A marker taken from the middle must not leave an empty field behind.
    return " ".join(text.split()), is_bc
