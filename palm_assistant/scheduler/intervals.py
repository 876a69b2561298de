"""
Interval helpers over (date, start_time, end_time) records
"""
from typing import Tuple

from palm_assistant.records.models import Event

MINUTES_PER_DAY = 24 * 60


def to_minutes(value: str) -> int:
    """Convert 'HH:MM' to minutes since midnight ('24:00' is end of day)"""
    try:
        hours, minutes = value.split(':')[:2]
        total = int(hours) * 60 + int(minutes)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid time: {value!r}. Expected HH:MM")
    if not 0 <= total <= MINUTES_PER_DAY:
        raise ValueError(f"Time out of range: {value!r}")
    return total


def from_minutes(total: int) -> str:
    """Convert minutes since midnight back to 'HH:MM'"""
    total = clamp(total, 0, MINUTES_PER_DAY)
    return f"{total // 60:02d}:{total % 60:02d}"


def clamp(value, low, high):
    return max(low, min(value, high))


def sort_key(event: Event) -> Tuple:
    """Chronological key: (date, start_time or '00:00')"""
    return (event.date, event.start_time or "00:00")


def compare(a: Event, b: Event) -> int:
    """Three-way chronological comparison of two events"""
    key_a, key_b = sort_key(a), sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def overlaps(a: Event, b: Event) -> bool:
    """
    True if both events fall on the same date and their half-open
    [start, end) intervals intersect. Untimed (all-day) events never overlap.
    """
    if a.date != b.date or not a.is_timed or not b.is_timed:
        return False
    return intervals_overlap(a.start_time, a.end_time, b.start_time, b.end_time)


def intervals_overlap(start1: str, end1: str, start2: str, end2: str) -> bool:
    s1, e1, s2, e2 = (to_minutes(t) for t in (start1, end1, start2, end2))
    # empty intervals occupy no time
    return s1 < e1 and s2 < e2 and s1 < e2 and s2 < e1
