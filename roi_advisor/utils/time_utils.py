"""
Time and duration utilities.

Key concepts:
  - Effort durations: plan tasks carry human strings such as ``"15 min"``,
    ``"2 weeks"`` or ``"Short-term (2-4 months)"``; these are parsed into
    working minutes so a plan's total effort can be summed.
  - Month labels: projections are labelled ``"Jan 25"`` style, starting
    from an explicit date so output is reproducible.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

# Working-time unit sizes, in minutes.
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 8 * MINUTES_PER_HOUR
MINUTES_PER_WEEK = 5 * MINUTES_PER_DAY
MINUTES_PER_MONTH = 4 * MINUTES_PER_WEEK

_UNIT_MINUTES: dict[str, int] = {
    "min": 1,
    "minute": 1,
    "h": MINUTES_PER_HOUR,
    "hour": MINUTES_PER_HOUR,
    "day": MINUTES_PER_DAY,
    "week": MINUTES_PER_WEEK,
    "month": MINUTES_PER_MONTH,
}

_DURATION_RE = re.compile(
    r"(?P<low>\d+(?:\.\d+)?)\s*(?:-\s*(?P<high>\d+(?:\.\d+)?))?\s*"
    r"(?P<unit>minutes?|min|hours?|h|days?|weeks?|months?)\b",
    re.IGNORECASE,
)

MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def parse_duration_minutes(text: str) -> int:
    """Parse an effort string into working minutes.

    The first ``<number> <unit>`` found is used; a range such as
    ``"2-4 months"`` counts its upper bound.

    Args:
        text: Duration string, e.g. ``"20 min"``, ``"1 week"``,
              ``"Immediate (1-2 months)"``.

    Returns:
        Working minutes (8-hour days, 5-day weeks, 4-week months).

    Raises:
        ValueError: If no duration can be found in ``text``.
    """
    match = _DURATION_RE.search(text or "")
    if match is None:
        raise ValueError(
            f"Cannot parse duration '{text}'. "
            "Expected '<N> <unit>' with unit min, hour, day, week or month."
        )
    amount = float(match.group("high") or match.group("low"))
    unit = match.group("unit").lower()
    if unit not in _UNIT_MINUTES:
        unit = unit.rstrip("s")
    return int(round(amount * _UNIT_MINUTES[unit]))


def format_duration(minutes: int) -> str:
    """Render working minutes with the two largest non-zero units.

    ``0`` → ``"0 minutes"``; ``150`` → ``"2 hours 30 minutes"``;
    ``MINUTES_PER_MONTH * 3 + MINUTES_PER_WEEK`` → ``"3 months 1 week"``.
    """
    if minutes <= 0:
        return "0 minutes"
    parts: list[str] = []
    remaining = minutes
    for label, size in (
        ("month", MINUTES_PER_MONTH),
        ("week", MINUTES_PER_WEEK),
        ("day", MINUTES_PER_DAY),
        ("hour", MINUTES_PER_HOUR),
        ("minute", 1),
    ):
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count} {label}{'s' if count != 1 else ''}")
        if len(parts) == 2:
            break
    return " ".join(parts)


def month_labels(start: date, count: int) -> list[str]:
    """``count`` consecutive month labels from ``start``'s month, e.g. ``"Nov 26"``."""
    labels = []
    for offset in range(count):
        index = start.month - 1 + offset
        year = start.year + index // 12
        labels.append(f"{MONTH_ABBREVIATIONS[index % 12]} {year % 100:02d}")
    return labels


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(tz=timezone.utc)
