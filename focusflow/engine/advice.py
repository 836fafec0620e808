"""Heuristic tips and risks for an optimized schedule."""

import math
from datetime import datetime
from typing import List, Optional, Sequence

from focusflow.engine.tiering import has_tight_deadline, is_high_priority, utc_now
from focusflow.models.schedule import ScheduleConstraints, WorkPatterns
from focusflow.models.task import Task


HIGH_PRIORITY_SHARE = 0.3
CONSECUTIVE_WORK_LIMIT_MINUTES = 120
MAX_WORK_DAYS = 5

TIP_SPLIT_HIGH_PRIORITY = "Consider breaking down high-priority tasks into smaller chunks"
TIP_LONGER_BREAKS = "Schedule longer breaks after intensive work periods"
TIP_PEAK_HOURS = "Schedule your most challenging tasks during your peak performance hours"

RISK_MULTI_WEEK = "Schedule spans multiple weeks - consider prioritizing critical tasks"


def generate_optimization_tips(
    ordering: Sequence[Task], work_patterns: Optional[WorkPatterns] = None
) -> List[str]:
    """Tips for an ordering; empty for an empty ordering.

    The break tip fires once cumulative work exceeds the longer of
    CONSECUTIVE_WORK_LIMIT_MINUTES and the user's average session length.
    """
    if not ordering:
        return []

    work_patterns = work_patterns or WorkPatterns()
    work_limit = max(CONSECUTIVE_WORK_LIMIT_MINUTES, work_patterns.average_session_length)

    tips = []

    high_priority = sum(1 for task in ordering if is_high_priority(task))
    if high_priority > len(ordering) * HIGH_PRIORITY_SHARE:
        tips.append(TIP_SPLIT_HIGH_PRIORITY)

    consecutive_minutes = 0
    for task in ordering:
        consecutive_minutes += task.estimated_minutes
        if consecutive_minutes > work_limit:
            tips.append(TIP_LONGER_BREAKS)
            break

    tips.append(TIP_PEAK_HOURS)
    return tips


def identify_schedule_risks(
    ordering: Sequence[Task],
    constraints: Optional[ScheduleConstraints] = None,
    now: Optional[datetime] = None,
) -> List[str]:
    """Risk strings: overlong schedules and deadlines inside the next 24 hours."""
    if not ordering:
        return []

    constraints = constraints or ScheduleConstraints()
    now = now or utc_now()
    risks = []

    total_minutes = sum(task.estimated_minutes for task in ordering)
    work_days = math.ceil(total_minutes / (constraints.work_hours_per_day * 60))
    if work_days > MAX_WORK_DAYS:
        risks.append(RISK_MULTI_WEEK)

    for task in ordering:
        if has_tight_deadline(task, now):
            risks.append(f'Task "{task.title}" has a tight deadline')

    return risks
