"""
Goal progress and urgency evaluation
"""
import math
from datetime import date
from enum import Enum
from typing import NamedTuple, Optional

from palm_assistant.records.models import Goal, GoalStatus
from palm_assistant.scheduler.intervals import clamp

INACTIVE_STATUSES = frozenset({GoalStatus.COMPLETED, GoalStatus.FAILED})
NEAR_DEADLINE_DAYS = 7


def goal_progress(goal: Goal) -> int:
    """Completed share of the estimated effort as a whole percentage in [0, 100]"""
    try:
        ratio = float(goal.completed_time) / float(goal.total_estimated_time)
    except (TypeError, ValueError, ZeroDivisionError):
        return 0
    if not math.isfinite(ratio):
        return 0
    # round half up
    return int(clamp(math.floor(ratio * 100 + 0.5), 0, 100))


def is_active(goal: Goal) -> bool:
    return GoalStatus(goal.status) not in INACTIVE_STATUSES


class UrgencyKind(str, Enum):
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    NEAR = "near"
    FAR = "far"


class GoalUrgency(NamedTuple):
    kind: UrgencyKind
    days_left: int
    target_date: date

    def describe(self) -> str:
        if self.kind is UrgencyKind.OVERDUE:
            overdue = abs(self.days_left)
            return f"{overdue} {'day' if overdue == 1 else 'days'} overdue!"
        if self.kind is UrgencyKind.DUE_TODAY:
            return "Due today!"
        if self.kind is UrgencyKind.NEAR:
            unit = "day" if self.days_left == 1 else "days"
            return f"{self.days_left} {unit} left"
        return f"Target: {self.target_date.isoformat()}"


def goal_urgency(goal: Goal, today: date) -> Optional[GoalUrgency]:
    """Classify how close the goal's target date is; None without a target date"""
    if goal.target_date is None:
        return None
    days_left = (goal.target_date - today).days
    if days_left < 0:
        kind = UrgencyKind.OVERDUE
    elif days_left == 0:
        kind = UrgencyKind.DUE_TODAY
    elif days_left <= NEAR_DEADLINE_DAYS:
        kind = UrgencyKind.NEAR
    else:
        kind = UrgencyKind.FAR
    return GoalUrgency(kind, days_left, goal.target_date)
