"""
Mock record store with sample data for running without a database
"""
import logging
from datetime import date, timedelta

from palm_assistant.records.models import Category, Event, Goal, GoalStatus, Priority, Todo
from palm_assistant.records.record_store import InMemoryRecordStore

logger = logging.getLogger(__name__)

class MockRecordStore(InMemoryRecordStore):
    """In-memory store seeded with a plausible week relative to `today`"""

    def __init__(self, today: date = None):
        today = today or date.today()
        categories = [
            Category("cat-work", "Work"),
            Category("cat-health", "Health"),
            Category("cat-study", "Study"),
            Category("cat-social", "Social"),
        ]
        events = []
        for i in range(5):
            day = today + timedelta(days=i + 1)
            events.append(Event(f"mock-standup-{i}", day, "Team standup", "09:00", "09:30",
                                category_id="cat-work"))
        events.append(Event("mock-gym", today + timedelta(days=1), "Gym", "18:00", "19:00",
                            location="Neighborhood gym", category_id="cat-health"))
        events.append(Event("mock-dinner", today + timedelta(days=2), "Dinner with friends",
                            "19:00", "21:00", location="Downtown", category_id="cat-social"))
        events.append(Event("mock-holiday", today + timedelta(days=3), "Family day",
                            is_all_day=True))

        goals = [
            Goal("mock-goal-toeic", "TOEIC 900", today + timedelta(days=30),
                 GoalStatus.IN_PROGRESS, 1200, 300, "cat-study", Priority.HIGH),
            Goal("mock-goal-weight", "Lose 3kg", today + timedelta(days=5),
                 GoalStatus.SCHEDULED, 600, 420, "cat-health"),
        ]
        todos = [
            Todo("mock-todo-report", "Finish quarterly report", today + timedelta(days=2), Priority.HIGH),
            Todo("mock-todo-vocab", "Review vocabulary list", None, Priority.MEDIUM,
                 goal_id="mock-goal-toeic"),
            Todo("mock-todo-plants", "Water the plants", today, Priority.LOW),
        ]

        super().__init__(events, goals, todos, categories)
        logger.info(f"📋 MOCK: Seeded {len(events)} events, {len(goals)} goals, {len(todos)} todos")
