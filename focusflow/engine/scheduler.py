"""Schedule materialization for focusflow.

Places an ordered list of tasks onto the clock: each task starts a fixed
buffer after the previous one ends. Order is preserved exactly.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from focusflow.engine.tiering import utc_now
from focusflow.models.constants import DEFAULT_SCHEDULED_CONFIDENCE, INTER_TASK_BUFFER_MINUTES
from focusflow.models.schedule import ScheduledTask
from focusflow.models.task import Task


def materialize_schedule(
    tasks: Sequence[Task],
    start_time: Optional[datetime] = None,
    buffer_minutes: int = INTER_TASK_BUFFER_MINUTES,
    confidences: Optional[Dict[str, float]] = None,
) -> List[ScheduledTask]:
    """Assign start and end timestamps to tasks in the given order.

    Args:
        tasks: Tasks in scheduling order
        start_time: When the first task starts (defaults to now)
        buffer_minutes: Break inserted between consecutive tasks
        confidences: Optional per-task confidence overrides keyed by task id

    Returns:
        ScheduledTask list in the same order as `tasks`
    """
    if start_time is None:
        start_time = utc_now()

    confidences = confidences or {}
    scheduled: List[ScheduledTask] = []
    current_time = start_time

    for task in tasks:
        end_time = current_time + timedelta(minutes=task.estimated_minutes)
        confidence = confidences.get(task.id, DEFAULT_SCHEDULED_CONFIDENCE)

        scheduled.append(
            ScheduledTask(
                task_id=task.id,
                start_time=current_time,
                end_time=end_time,
                confidence=min(max(confidence, 0.0), 1.0),
            )
        )

        # Move current time forward past the break
        current_time = end_time + timedelta(minutes=buffer_minutes)

    return scheduled


def scheduled_order(scheduled: Sequence[ScheduledTask]) -> List[str]:
    """Task ids ordered by start time."""
    return [item.task_id for item in sorted(scheduled, key=lambda item: item.start_time)]
