"""
Read-only access to the user's events, goals, todos and categories
"""
import json
import logging
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from palm_assistant.records.models import Category, Event, Goal, Todo

logger = logging.getLogger(__name__)

class RecordStore(ABC):
    """Read accessors for the current user's records; the core never writes"""

    @abstractmethod
    def get_events(self, start_date: Optional[date] = None,
                   end_date: Optional[date] = None) -> List[Event]:
        pass

    @abstractmethod
    def get_goals(self) -> List[Goal]:
        pass

    @abstractmethod
    def get_todos(self) -> List[Todo]:
        pass

    @abstractmethod
    def get_categories(self) -> List[Category]:
        pass


class InMemoryRecordStore(RecordStore):
    """Record store over lists already loaded into memory"""

    def __init__(self, events: Iterable[Event] = (), goals: Iterable[Goal] = (),
                 todos: Iterable[Todo] = (), categories: Iterable[Category] = ()):
        self.events = list(events)
        self.goals = list(goals)
        self.todos = list(todos)
        self.categories = list(categories)

    def get_events(self, start_date: Optional[date] = None,
                   end_date: Optional[date] = None) -> List[Event]:
        return [
            e for e in self.events
            if (start_date is None or e.date >= start_date)
            and (end_date is None or e.date <= end_date)
        ]

    def get_goals(self) -> List[Goal]:
        return list(self.goals)

    def get_todos(self) -> List[Todo]:
        return list(self.todos)

    def get_categories(self) -> List[Category]:
        return list(self.categories)

    @classmethod
    def from_dict(cls, data: Dict) -> "InMemoryRecordStore":
        return cls(
            events=[Event.from_dict(e) for e in data.get("events", [])],
            goals=[Goal.from_dict(g) for g in data.get("goals", [])],
            todos=[Todo.from_dict(t) for t in data.get("todos", [])],
            categories=[Category.from_dict(c) for c in data.get("categories", [])],
        )


class JsonRecordStore(InMemoryRecordStore):
    """Record store backed by a JSON export of the user's records"""

    def __init__(self, path):
        self.path = Path(path)
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        loaded = InMemoryRecordStore.from_dict(data)
        super().__init__(loaded.events, loaded.goals, loaded.todos, loaded.categories)
        logger.info(f"📂 Loaded {len(self.events)} events, {len(self.goals)} goals, "
                    f"{len(self.todos)} todos from {self.path}")
