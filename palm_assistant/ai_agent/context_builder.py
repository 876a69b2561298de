"""
Prompt context assembly for the chat model

Builds the plain-text picture of the user's situation that goes into the
system prompt: upcoming events, free slots, active goals with urgency,
pending todos and the user's categories. Nothing in here talks to the model.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from palm_assistant.config.settings import Config
from palm_assistant.records.models import (AgentDomain, Category, ChatMessage, Event, Goal,
                                           Priority, Todo)
from palm_assistant.scheduler.free_slots import DayBounds, free_slots_by_day
from palm_assistant.scheduler.goal_progress import goal_progress, goal_urgency, is_active
from palm_assistant.scheduler.intervals import sort_key

logger = logging.getLogger(__name__)

WEEKDAYS = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']
PRIORITY_TAGS = {Priority.HIGH: '[Urgent]', Priority.MEDIUM: '[Normal]', Priority.LOW: '[Low]'}
PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


def weekday(day: date) -> str:
    return WEEKDAYS[day.weekday()]


def format_day(day: date) -> str:
    """e.g. 'Jun 1, 2025 (Sun)'"""
    return f"{day.strftime('%b')} {day.day}, {day.year} ({weekday(day)})"


def _category_names(categories: Iterable[Category]) -> Dict[str, str]:
    return {c.id: c.name for c in categories or ()}


def summarize_events(events: Iterable[Event], today: date,
                     categories: Iterable[Category] = (),
                     days: int = None, limit: int = None) -> str:
    """Chronological list of events between today and today + days"""
    days = Config.EVENT_LOOKAHEAD_DAYS if days is None else days
    limit = Config.MAX_CONTEXT_EVENTS if limit is None else limit
    names = _category_names(categories)
    horizon = today + timedelta(days=days)

    relevant = sorted((e for e in events if today <= e.date <= horizon), key=sort_key)
    if not relevant:
        return f"No events registered for the next {days} days."

    lines = []
    for e in relevant[:limit]:
        time = f"{e.start_time}~{e.end_time or ''}" if e.start_time else "All day"
        category = f"[{names[e.category_id]}]" if e.category_id in names else ""
        status = "[Completed]" if e.is_completed else ""
        location = f" @ {e.location}" if e.location else ""
        tags = category + status
        label = f"{tags} {e.title}" if tags else e.title
        lines.append(f"- {e.date.isoformat()} ({weekday(e.date)}) {time}: {label}{location}")
    return "\n".join(lines)


def summarize_free_slots(events: Iterable[Event], today: date,
                         days: int = None, bounds: DayBounds = None) -> str:
    """One line per day listing the free slots inside the working day"""
    days = Config.SLOT_LOOKAHEAD_DAYS if days is None else days
    bounds = bounds or Config.get_day_bounds()
    events = list(events)

    lines = []
    for day, slots in free_slots_by_day(events, today, days, bounds).items():
        if not slots:
            rendered = "No slots"
        elif len(slots) == 1 and (slots[0].start_time, slots[0].end_time) == tuple(bounds):
            rendered = f"{slots[0]} (All day available)"
        else:
            rendered = ", ".join(str(slot) for slot in slots)
        lines.append(f"{day.isoformat()} ({weekday(day)}): {rendered}")
    return "\n".join(lines)


def summarize_goals(goals: Iterable[Goal], today: date,
                    categories: Iterable[Category] = ()) -> str:
    """Active goals with progress and deadline framing"""
    names = _category_names(categories)
    active = [g for g in goals if is_active(g)]
    if not active:
        return "No goals set."

    lines = []
    for g in active:
        details = f"Progress: {goal_progress(g)}%"
        urgency = goal_urgency(g, today)
        if urgency is not None:
            details += f", {urgency.describe()}"
        category = f"[{names[g.category_id]}] " if g.category_id in names else ""
        lines.append(f"- {category}{g.title} ({details})")
    return "\n".join(lines)


def _todo_rank(todo: Todo):
    return (PRIORITY_ORDER[Priority(todo.priority)], todo.deadline is None, todo.deadline or date.max)


def summarize_todos(todos: Iterable[Todo], limit: int = None) -> str:
    """Incomplete todos, most pressing first"""
    limit = Config.MAX_CONTEXT_TODOS if limit is None else limit
    pending = sorted((t for t in todos if not t.is_completed), key=_todo_rank)
    if not pending:
        return "No todos."

    lines = []
    for t in pending[:limit]:
        due = f" (Due: {t.deadline.isoformat()})" if t.deadline else ""
        lines.append(f"{PRIORITY_TAGS[Priority(t.priority)]} {t.title}{due}")
    return "\n".join(lines)


def summarize_categories(categories: Iterable[Category]) -> str:
    return ", ".join(c.name for c in categories or ()) or Config.DEFAULT_CATEGORY


def build_context(events: Iterable[Event], goals: Iterable[Goal], todos: Iterable[Todo],
                  today: date, categories: Iterable[Category] = ()) -> str:
    """Assemble the user-status section of the system prompt"""
    events = list(events)
    categories = list(categories or ())
    sections = [
        (f"Existing Schedule (Next {Config.EVENT_LOOKAHEAD_DAYS} days)",
         summarize_events(events, today, categories)),
        (f"Free Slots (Next {Config.SLOT_LOOKAHEAD_DAYS} days)", summarize_free_slots(events, today)),
        ("User Goals", summarize_goals(goals, today, categories)),
        ("Todos", summarize_todos(todos)),
        ("User Categories", summarize_categories(categories)),
    ]
    body = "\n\n".join(f"### {title}:\n{content}" for title, content in sections)
    return f"## User Status\n\n{body}"


def build_system_prompt(context: str, agents: Sequence[AgentDomain],
                        today: date, now: Optional[datetime] = None) -> str:
    """Wrap an assembled context in the fixed instruction preamble"""
    now = now or datetime.now()
    return Config.SYSTEM_PROMPT.format(
        today=format_day(today),
        current_time=now.strftime('%H:%M'),
        agents=", ".join(AgentDomain(a).value for a in agents),
        context=context,
        default_category=Config.DEFAULT_CATEGORY,
    )


def build_history(history: Iterable[ChatMessage], limit: int = None) -> List[Dict[str, str]]:
    """
    Convert the caller's transcript into chat messages, keeping the last
    `limit` entries. Suggestions made earlier are appended to their message
    so the model can refer back to them.
    """
    limit = Config.HISTORY_LIMIT if limit is None else limit
    history = list(history or ())
    messages = []
    for message in (history[-limit:] if limit else []):
        content = message.content
        if message.suggestions:
            previous = "\n".join(
                f"- {s.date}{' ' + s.start_time if s.start_time else ''}: {s.title}"
                for s in message.suggestions
            )
            content += f"\n\n[Previously Recommended Schedules]\n{previous}"
        messages.append({"role": message.role, "content": content})
    return messages
