from datetime import date, timedelta

from palm_assistant.records.models import Event
from palm_assistant.scheduler.free_slots import DayBounds, find_free_slots, free_slots_by_day
from palm_assistant.scheduler.intervals import intervals_overlap

from tests.conftest import DAY, make_event


def _ranges(slots):
    return [(s.start_time, s.end_time) for s in slots]


def test_empty_day_is_one_slot():
    assert _ranges(find_free_slots([], DAY)) == [("07:00", "22:00")]


def test_slots_are_complement_of_events(events):
    slots = find_free_slots(events, DAY)
    assert _ranges(slots) == [("07:00", "09:00"), ("10:00", "12:00"), ("13:00", "22:00")]
    for slot in slots:
        for event in events:
            if event.is_timed:
                assert not intervals_overlap(slot.start_time, slot.end_time,
                                             event.start_time, event.end_time)


def test_overlapping_and_touching_events_merge():
    day_events = [
        make_event("a", "09:00", "10:00"),
        make_event("b", "09:30", "11:00"),
        make_event("c", "11:00", "12:00"),
    ]
    assert _ranges(find_free_slots(day_events, DAY)) == [("07:00", "09:00"), ("12:00", "22:00")]


def test_order_of_input_does_not_matter(events):
    assert find_free_slots(events, DAY) == find_free_slots(list(reversed(events)), DAY)


def test_fully_booked_day_has_no_slots():
    assert find_free_slots([make_event("all", "07:00", "22:00")], DAY) == []


def test_events_outside_bounds_are_clamped():
    day_events = [make_event("early", "05:00", "08:00"), make_event("late", "21:00", "23:30")]
    assert _ranges(find_free_slots(day_events, DAY)) == [("08:00", "21:00")]


def test_all_day_and_other_dates_ignored():
    day_events = [
        Event("holiday", DAY, "Holiday", is_all_day=True),
        make_event("tomorrow", "09:00", "10:00", day=DAY + timedelta(days=1)),
        make_event("empty", "10:00", "10:00"),
    ]
    assert _ranges(find_free_slots(day_events, DAY)) == [("07:00", "22:00")]


def test_min_duration_filters_short_slots():
    day_events = [make_event("a", "07:20", "12:00"), make_event("b", "12:30", "22:00")]
    slots = find_free_slots(day_events, DAY, min_duration=30)
    assert _ranges(slots) == [("12:00", "12:30")]
    assert slots[0].duration_minutes == 30


def test_custom_bounds():
    slots = find_free_slots([make_event("a", "09:00", "10:00")], DAY, DayBounds("08:00", "18:00"))
    assert _ranges(slots) == [("08:00", "09:00"), ("10:00", "18:00")]


def test_free_slots_by_day_covers_each_day():
    result = free_slots_by_day([make_event("a", "07:00", "22:00")], DAY, 3)
    assert list(result) == [DAY, date(2025, 6, 2), date(2025, 6, 3)]
    assert result[DAY] == []
    assert _ranges(result[date(2025, 6, 2)]) == [("07:00", "22:00")]
