"""Vintage year parsing for freeform model output."""

from __future__ import annotations

import re

_YEAR_PATTERN = re.compile(r"[0-9]{2,4}")
_CENTURY_PIVOT = 30


def normalize_year(raw_year: str | None) -> int | None:
    """Parse a raw year token such as ``"21"``, ``"2021"`` or ``"N/A"``.

    The first run of 2 to 4 digits wins. Two-digit years below 30 land in
    the 2000s, the rest in the 1900s. Three and four digit runs are taken
    literally. Returns ``None`` when there is no digit run at all.
    """
    if not raw_year:
        return None

    match = _YEAR_PATTERN.search(raw_year)
    if match is None:
        return None

    digits = match.group(0)
    if len(digits) == 2:
        two_digit_year = int(digits)
        century = 2000 if two_digit_year < _CENTURY_PIVOT else 1900
        return century + two_digit_year
    return int(digits)
