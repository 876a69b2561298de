"""
Shared fixtures for the PALM Scheduling Assistant tests
"""
from datetime import date, datetime

import pytest

from palm_assistant.ai_agent.mock_llm_client import MockLLMClient
from palm_assistant.records.models import (Category, Event, Goal, GoalStatus, Priority,
                                           Todo)
from palm_assistant.records.record_store import InMemoryRecordStore
from palm_assistant.scheduler.scheduling_assistant import SchedulingAssistant

DAY = date(2025, 6, 1)  # a Sunday


def make_event(event_id, start, end, day=DAY, title=None, **kwargs):
    return Event(event_id, day, title or event_id, start, end, **kwargs)


@pytest.fixture
def day():
    return DAY


@pytest.fixture
def now():
    return datetime(2025, 6, 1, 8, 30)


@pytest.fixture
def categories():
    return [Category("cat-health", "Health"), Category("cat-study", "Study")]


@pytest.fixture
def events():
    return [
        make_event("standup", "09:00", "10:00", title="Standup"),
        make_event("lunch", "12:00", "13:00", title="Lunch", location="Cafe"),
        Event("holiday", DAY, "Holiday", is_all_day=True),
    ]


@pytest.fixture
def goals(day):
    return [
        Goal("g1", "TOEIC 900", date(2025, 6, 2), GoalStatus.IN_PROGRESS, 100, 25,
             "cat-study", Priority.HIGH),
        Goal("g2", "Old goal", date(2025, 5, 1), GoalStatus.COMPLETED, 10, 10),
    ]


@pytest.fixture
def todos():
    return [
        Todo("t1", "Water plants", None, Priority.LOW),
        Todo("t2", "Send report", date(2025, 6, 3), Priority.HIGH),
        Todo("t3", "Done already", date(2025, 6, 1), Priority.HIGH, is_completed=True),
    ]


@pytest.fixture
def store(events, goals, todos, categories):
    return InMemoryRecordStore(events, goals, todos, categories)


@pytest.fixture
def mock_llm():
    return MockLLMClient()


@pytest.fixture
def assistant(mock_llm):
    return SchedulingAssistant(llm_client=mock_llm)
