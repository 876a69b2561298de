from datetime import date

import pytest

from palm_assistant.records.models import Goal, GoalStatus
from palm_assistant.scheduler.goal_progress import (UrgencyKind, goal_progress, goal_urgency,
                                                    is_active)

TODAY = date(2025, 6, 1)


def _goal(total, done, target=None, status=GoalStatus.IN_PROGRESS):
    return Goal("g", "Goal", target, status, total, done)


@pytest.mark.parametrize("total,done,expected", [
    (100, 0, 0),
    (100, 25, 25),
    (3, 1, 33),
    (8, 1, 13),  # 12.5 rounds up
    (100, 150, 100),
    (0, 10, 0),
    (100, -5, 0),
])
def test_goal_progress(total, done, expected):
    assert goal_progress(_goal(total, done)) == expected


def test_progress_guards_bad_numbers():
    assert goal_progress(_goal(float("nan"), 1)) == 0
    assert goal_progress(_goal(None, 1)) == 0


def test_progress_is_monotonic():
    values = [goal_progress(_goal(60, done)) for done in range(0, 70)]
    assert values == sorted(values)
    assert all(0 <= v <= 100 for v in values)


def test_is_active():
    assert is_active(_goal(1, 0, status=GoalStatus.PLANNING))
    assert not is_active(_goal(1, 1, status=GoalStatus.COMPLETED))
    assert not is_active(_goal(1, 0, status=GoalStatus.FAILED))


@pytest.mark.parametrize("target,kind,text", [
    (date(2025, 5, 29), UrgencyKind.OVERDUE, "3 days overdue!"),
    (date(2025, 5, 31), UrgencyKind.OVERDUE, "1 day overdue!"),
    (date(2025, 6, 1), UrgencyKind.DUE_TODAY, "Due today!"),
    (date(2025, 6, 2), UrgencyKind.NEAR, "1 day left"),
    (date(2025, 6, 8), UrgencyKind.NEAR, "7 days left"),
    (date(2025, 6, 9), UrgencyKind.FAR, "Target: 2025-06-09"),
])
def test_goal_urgency(target, kind, text):
    urgency = goal_urgency(_goal(10, 1, target), TODAY)
    assert urgency.kind is kind
    assert urgency.describe() == text


def test_no_target_date_has_no_urgency():
    assert goal_urgency(_goal(10, 1), TODAY) is None
