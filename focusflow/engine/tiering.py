"""Priority tiering helpers for focusflow.

Maps task priorities onto the fixed weight hierarchy used by the fitness
evaluator and the schedule advisor, and answers deadline-proximity questions.
Everything here is deterministic: same inputs always produce same outputs.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from focusflow.models.task import Task, TaskCategory, TaskPriority


# Fixed priority weight hierarchy (highest to lowest)
WEIGHT_CRITICAL = 4.0
WEIGHT_HIGH = 3.0
WEIGHT_MEDIUM = 2.0
WEIGHT_LOW = 1.0

MAX_PRIORITY_WEIGHT = WEIGHT_CRITICAL

PRIORITY_COUNT = len(TaskPriority)
CATEGORY_COUNT = len(TaskCategory)

_PRIORITY_WEIGHTS = {
    TaskPriority.CRITICAL: WEIGHT_CRITICAL,
    TaskPriority.HIGH: WEIGHT_HIGH,
    TaskPriority.MEDIUM: WEIGHT_MEDIUM,
    TaskPriority.LOW: WEIGHT_LOW,
}


def utc_now() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def priority_weight(priority: TaskPriority) -> float:
    """Get the scheduling weight of a priority.

    Args:
        priority: Task priority

    Returns:
        Weight (critical=4, high=3, medium=2, low=1)
    """
    return _PRIORITY_WEIGHTS[TaskPriority(priority)]


def normalized_priority(priority: TaskPriority) -> float:
    """Priority ordinal divided by the number of priorities."""
    return TaskPriority(priority).ordinal / PRIORITY_COUNT


def normalized_category(category: TaskCategory) -> float:
    """Category ordinal divided by the number of categories."""
    return TaskCategory(category).ordinal / CATEGORY_COUNT


def is_high_priority(task: Task) -> bool:
    return TaskPriority(task.priority) in (TaskPriority.HIGH, TaskPriority.CRITICAL)


def hours_until(deadline: datetime, instant: datetime) -> float:
    """Signed hours from instant to deadline (negative when overdue).

    A naive datetime compared against an aware one is treated as UTC.
    """
    if deadline.tzinfo is not None and instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    elif deadline.tzinfo is None and instant.tzinfo is not None:
        deadline = deadline.replace(tzinfo=timezone.utc)
    return (deadline - instant).total_seconds() / 3600.0


def has_tight_deadline(task: Task, now: Optional[datetime] = None) -> bool:
    """Check if a task is due within the next 24 hours (or already overdue).

    Args:
        task: Task to check
        now: Reference instant (defaults to current UTC time)

    Returns:
        True if the due time is before now + 24 hours
    """
    if not task.due:
        return False

    if now is None:
        now = utc_now()

    return hours_until(task.due, now) < timedelta(days=1).total_seconds() / 3600.0

