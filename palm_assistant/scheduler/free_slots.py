"""
Free slot calculation - the complement of a day's timed events inside the working day
"""
import logging
from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, Iterable, List, NamedTuple

from palm_assistant.records.models import Event, TimeSlot
from palm_assistant.scheduler.intervals import from_minutes, to_minutes

logger = logging.getLogger(__name__)


class DayBounds(NamedTuple):
    """Working-day window, HH:MM"""
    start: str = "07:00"
    end: str = "22:00"


def find_free_slots(day_events: Iterable[Event], day: date,
                    bounds: DayBounds = DayBounds(),
                    min_duration: int = 0) -> List[TimeSlot]:
    """
    Find the free windows on `day` between bounds.start and bounds.end.

    Only events on `day` that have both a start and an end later than the
    start block time; all-day events do not. Slots are returned in time
    order, and slots shorter than `min_duration` minutes are dropped.
    """
    day_start, day_end = to_minutes(bounds.start), to_minutes(bounds.end)

    busy = sorted(
        (to_minutes(e.start_time), to_minutes(e.end_time))
        for e in day_events
        if e.date == day and e.is_timed and to_minutes(e.end_time) > to_minutes(e.start_time)
    )

    slots = []
    cursor = day_start
    for start, end in busy:
        if cursor >= day_end or start >= day_end:
            break
        if cursor < start:
            slots.append((cursor, start))
        cursor = max(cursor, end)

    if cursor < day_end:
        slots.append((cursor, day_end))

    return [
        TimeSlot(day, from_minutes(start), from_minutes(end))
        for start, end in slots
        if end - start >= min_duration
    ]


def free_slots_by_day(events: Iterable[Event], start_day: date, days: int,
                      bounds: DayBounds = DayBounds(),
                      min_duration: int = 0) -> Dict[date, List[TimeSlot]]:
    """Free slots for `days` consecutive days starting at `start_day`"""
    events = list(events)
    result = OrderedDict()
    for offset in range(days):
        day = start_day + timedelta(days=offset)
        result[day] = find_free_slots(events, day, bounds, min_duration)
    logger.debug(f"Computed free slots for {days} days from {start_day.isoformat()}")
    return result
