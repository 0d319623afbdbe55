from __future__ import annotations

import math
from typing import List

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
YEAR = 365 * DAY


def _plural(count: int, label: str) -> str:
    return f"{count} {label}{'' if count == 1 else 's'}"


def format_duration(seconds: float) -> str:
    """Largest two units, e.g. ``2 hrs 5 min``, ``1 yr 35 days``, ``42 sec``.

    Years and days drop a zero second unit; hours and minutes always show it.
    ``min`` and ``sec`` are abbreviations and never pluralize. Negative and
    non-finite input renders as ``0 sec``.
    """
    if not seconds or not math.isfinite(seconds):
        return "0 sec"
    s = max(0, int(seconds))

    years, s = divmod(s, YEAR)
    days, s = divmod(s, DAY)
    hours, s = divmod(s, HOUR)
    mins, secs = divmod(s, MINUTE)

    parts: List[str] = []
    if years:
        parts.append(_plural(years, "yr"))
        if days:
            parts.append(_plural(days, "day"))
    elif days:
        parts.append(_plural(days, "day"))
        if hours:
            parts.append(_plural(hours, "hr"))
    elif hours:
        parts.append(_plural(hours, "hr"))
        parts.append(f"{mins} min")
    elif mins:
        parts.append(f"{mins} min")
        parts.append(f"{secs} sec")
    else:
        parts.append(f"{secs} sec")
    return " ".join(parts)
