"""
Record types shared by the scheduling core

Events, goals, todos and categories are owned by the external record store and
arrive here as dictionaries using the store's column names (event_date,
category_id, total_estimated_time, ...). TimeSlot, SuggestedEvent and
ConflictRecord are derived values that never go back to the store.
"""
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

_TIME_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})(?::\d{2}(?:\.\d+)?)?$')


def normalize_time(value: Any) -> Optional[str]:
    """Normalize 'H:MM', 'HH:MM' or 'HH:MM:SS' to 'HH:MM'; None if not a time"""
    if not isinstance(value, str):
        return None
    match = _TIME_PATTERN.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes > 59 or hours > 24 or (hours == 24 and minutes != 0):
        return None
    return f"{hours:02d}:{minutes:02d}"


def parse_date(value: Any) -> Optional[date]:
    """Parse a YYYY-MM-DD string (or the date part of an ISO datetime)"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value).split('T')[0], "%Y-%m-%d").date()


class GoalStatus(str, Enum):
    PLANNING = "planning"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AgentDomain(str, Enum):
    """Specialist personas a message can be routed to"""
    COORDINATOR = "coordinator"
    HEALTH = "health"
    STUDY = "study"
    CAREER = "career"
    LIFESTYLE = "lifestyle"
    SCHEDULER = "scheduler"


@dataclass
class Category:
    id: str
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(id=str(data["id"]), name=data.get("name", ""))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass
class Event:
    """A calendar event as read from the record store"""

    id: str
    date: date
    title: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    is_all_day: bool = False
    category_id: Optional[str] = None
    is_completed: bool = False
    description: Optional[str] = None

    def __post_init__(self):
        if self.is_all_day:
            self.start_time = None
            self.end_time = None
        else:
            self.start_time = normalize_time(self.start_time)
            self.end_time = normalize_time(self.end_time)

    @property
    def is_timed(self) -> bool:
        return self.start_time is not None and self.end_time is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        return cls(
            id=str(data.get("id", "")),
            date=parse_date(data.get("event_date") or data.get("date")),
            title=data.get("title", ""),
            start_time=data.get("start_time"),
            end_time=data.get("end_time"),
            location=data.get("location") or None,
            is_all_day=bool(data.get("is_all_day", False)),
            category_id=data.get("category_id"),
            is_completed=bool(data.get("is_completed", False)),
            description=data.get("description") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "event_date": self.date.isoformat(),
            "title": self.title,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "location": self.location,
            "is_all_day": self.is_all_day,
            "category_id": self.category_id,
            "is_completed": self.is_completed,
            "description": self.description,
        }


@dataclass
class Goal:
    id: str
    title: str
    target_date: Optional[date] = None
    status: GoalStatus = GoalStatus.PLANNING
    total_estimated_time: float = 0
    completed_time: float = 0
    category_id: Optional[str] = None
    priority: Priority = Priority.MEDIUM

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            target_date=parse_date(data.get("target_date")),
            status=GoalStatus(data.get("status", GoalStatus.PLANNING.value)),
            total_estimated_time=data.get("total_estimated_time") or 0,
            completed_time=data.get("completed_time") or 0,
            category_id=data.get("category_id"),
            priority=Priority(data.get("priority", Priority.MEDIUM.value)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "target_date": self.target_date.isoformat() if self.target_date else None,
            "status": self.status.value,
            "total_estimated_time": self.total_estimated_time,
            "completed_time": self.completed_time,
            "category_id": self.category_id,
            "priority": self.priority.value,
        }


@dataclass
class Todo:
    id: str
    title: str
    deadline: Optional[date] = None
    priority: Priority = Priority.MEDIUM
    is_completed: bool = False
    goal_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Todo":
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title", ""),
            deadline=parse_date(data.get("deadline")),
            priority=Priority(data.get("priority", Priority.MEDIUM.value)),
            is_completed=bool(data.get("is_completed", False)),
            goal_id=data.get("goal_id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "deadline": self.deadline.isoformat() if self.deadline else None,
            "priority": self.priority.value,
            "is_completed": self.is_completed,
            "goal_id": self.goal_id,
        }


@dataclass(frozen=True)
class TimeSlot:
    """A free window on one day; start and end are HH:MM"""

    date: date
    start_time: str
    end_time: str

    @property
    def duration_minutes(self) -> int:
        from palm_assistant.scheduler.intervals import to_minutes
        return to_minutes(self.end_time) - to_minutes(self.start_time)

    def __str__(self) -> str:
        return f"{self.start_time}~{self.end_time}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration_minutes": self.duration_minutes,
        }


@dataclass
class SuggestedEvent:
    """An event proposal extracted from a model reply, pending user acceptance"""

    title: str
    date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    category_name: str = "Default"
    description: Optional[str] = None
    rationale: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "date": self.date,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "location": self.location,
            "category_name": self.category_name,
            "description": self.description,
            "reason": self.rationale,
        }


@dataclass(frozen=True)
class ConflictRecord:
    event_a: Event
    event_b: Event

    def describe(self) -> str:
        a, b = self.event_a, self.event_b
        return (f'"{a.title}" ({a.start_time}~{a.end_time}) and '
                f'"{b.title}" ({b.start_time}~{b.end_time}) overlap on {a.date.isoformat()}.')

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_a": self.event_a.to_dict(),
            "event_b": self.event_b.to_dict(),
            "message": self.describe(),
        }


@dataclass
class ChatMessage:
    """One transcript entry supplied by the caller"""

    role: str
    content: str
    suggestions: List[SuggestedEvent] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatMessage":
        suggestions = []
        for item in data.get("suggestions") or []:
            suggestions.append(SuggestedEvent(
                title=item.get("title", ""),
                date=item.get("date", ""),
                start_time=item.get("start_time"),
                end_time=item.get("end_time"),
                location=item.get("location"),
                category_name=item.get("category_name") or "Default",
                description=item.get("description"),
                rationale=item.get("reason") or item.get("rationale") or "",
            ))
        return cls(role=data.get("role", "user"), content=data.get("content", ""),
                   suggestions=suggestions)
