"""Parse free-form step durations ("1h30", "8m", "02:30") into minutes."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def _digits(s: str) -> str:
    return re.sub(r"\D", "", s)


def _to_int(s: str, default: Optional[int] = 0) -> Optional[int]:
    try:
        return int(s)
    except ValueError:
        return default


def parse_minutes(value: str) -> Optional[int]:
    """Return whole minutes for a duration string, or None when unspecified.

    - "1h30", "2 h", "1h 15m": hours before the first "h", minutes after it.
    - "mm:ss": seconds are rounded to the nearest minute, halves away from zero.
    - anything else: all digits in the string, so "8m" -> 8 and "" -> None.
    """
    s = (value or "").strip().lower()

    if "h" in s:
        hours, _, minutes = s.partition("h")
        return (_to_int(_digits(hours)) or 0) * 60 + (_to_int(_digits(minutes)) or 0)

    if ":" in s:
        parts = [p for p in s.split(":") if p]
        if len(parts) == 2:
            minutes = _to_int(parts[0].strip()) or 0
            seconds = _to_int(parts[1].strip()) or 0
            rounded = (Decimal(seconds) / 60).to_integral_value(rounding=ROUND_HALF_UP)
            total = minutes + int(rounded)
            return total if total >= 0 else None

    return _to_int(_digits(s), default=None)
