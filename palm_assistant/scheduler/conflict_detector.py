"""
Schedule conflict detection over a user's events
"""
import logging
from typing import Iterable, List

from palm_assistant.records.models import ConflictRecord, Event
from palm_assistant.scheduler.intervals import intervals_overlap, overlaps, sort_key, to_minutes

logger = logging.getLogger(__name__)


def detect_conflicts(events: Iterable[Event], adjacent_only: bool = False) -> List[ConflictRecord]:
    """
    Find every pair of timed events on the same date whose intervals overlap.

    Events are scanned in chronological order; each event is compared with
    the following events on its date until one starts at or after its end,
    so an event nested inside a longer one is reported even when other
    events sort between them.

    With adjacent_only=True only neighbours in sort order are compared
    (legacy behaviour, misses nested events).
    """
    if adjacent_only:
        return _detect_adjacent_conflicts(events)

    timed = sorted((e for e in events if e.is_timed), key=sort_key)
    conflicts = []

    for i, current in enumerate(timed):
        current_end = to_minutes(current.end_time)
        for other in timed[i + 1:]:
            if other.date != current.date or to_minutes(other.start_time) >= current_end:
                break
            if overlaps(current, other):
                conflicts.append(ConflictRecord(current, other))

    if conflicts:
        logger.info(f"⚠️  Found {len(conflicts)} schedule conflicts")
    return conflicts


def _detect_adjacent_conflicts(events: Iterable[Event]) -> List[ConflictRecord]:
    ordered = sorted(events, key=sort_key)
    conflicts = []
    for current, following in zip(ordered, ordered[1:]):
        if current.date != following.date:
            continue
        if current.end_time and following.start_time and current.end_time > following.start_time:
            conflicts.append(ConflictRecord(current, following))
    return conflicts


def find_conflicting_events(day, start_time: str, end_time: str,
                            events: Iterable[Event]) -> List[Event]:
    """List existing timed events on `day` that overlap [start_time, end_time)"""
    return [
        e for e in events
        if e.date == day and e.is_timed
        and intervals_overlap(start_time, end_time, e.start_time, e.end_time)
    ]
