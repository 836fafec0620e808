"""Schedule fitness evaluation for focusflow.

A candidate ordering is scored in [0, 100] as a weighted sum of four
sub-scores, each in [0, 1]:

- completion feasibility (40%)
- priority optimization (30%)
- work-pattern alignment (20%)
- deadline adherence (10%)

The evaluator holds only read-only configuration, so distinct candidates can
be evaluated concurrently.
"""

import math
from datetime import datetime, timedelta
from typing import Optional, Sequence

from focusflow.engine.tiering import MAX_PRIORITY_WEIGHT, hours_until, priority_weight, utc_now
from focusflow.models.schedule import ScheduleConstraints, WorkPatterns
from focusflow.models.task import Task


FEASIBILITY_WEIGHT = 40.0
PRIORITY_WEIGHT = 30.0
ALIGNMENT_WEIGHT = 20.0
DEADLINE_WEIGHT = 10.0

MAX_FITNESS = 100.0

# Overdue tasks lose all deadline credit after this many hours.
OVERDUE_GRACE_HOURS = 24.0


class ScheduleFitnessEvaluator:
    """Scores task orderings against constraints and work patterns."""

    def __init__(
        self,
        constraints: Optional[ScheduleConstraints] = None,
        work_patterns: Optional[WorkPatterns] = None,
        now: Optional[datetime] = None,
    ):
        self.constraints = constraints or ScheduleConstraints()
        self.work_patterns = work_patterns or WorkPatterns()
        self.now = now or utc_now()
        self.peak_hours = self.work_patterns.effective_peak_hours(self.constraints)

    def evaluate(self, ordering: Sequence[Task]) -> float:
        """Total fitness of an ordering, clamped to [0, 100]."""
        if not ordering:
            return 0.0

        fitness = 0.0
        fitness += self.completion_feasibility(ordering) * FEASIBILITY_WEIGHT
        fitness += self.priority_optimization(ordering) * PRIORITY_WEIGHT
        fitness += self.work_pattern_alignment(ordering) * ALIGNMENT_WEIGHT
        fitness += self.deadline_adherence(ordering) * DEADLINE_WEIGHT

        return min(max(fitness, 0.0), MAX_FITNESS)

    def completion_feasibility(self, ordering: Sequence[Task]) -> float:
        """Share of tasks that fit into consecutive days of work capacity."""
        if not ordering:
            return 0.0

        capacity = self.constraints.work_hours_per_day * 60.0
        day_minutes = 0.0
        completable = 0

        for task in ordering:
            if day_minutes + task.estimated_minutes <= capacity:
                completable += 1
                day_minutes += task.estimated_minutes
            else:
                # Roll over to a fresh day
                day_minutes = float(task.estimated_minutes)
                if day_minutes <= capacity:
                    completable += 1

        return completable / len(ordering)

    def priority_optimization(self, ordering: Sequence[Task]) -> float:
        """Reward high-priority tasks placed early in the ordering."""
        count = len(ordering)
        score = 0.0
        total_weight = 0.0

        for position, task in enumerate(ordering):
            weight = priority_weight(task.priority)
            score += weight * (1.0 - position / count)
            total_weight += weight

        return score / total_weight if total_weight > 0 else 0.0

    def work_pattern_alignment(self, ordering: Sequence[Task]) -> float:
        """Priority weight landing in peak hours, normalized to [0, 1]."""
        if not ordering:
            return 0.0

        start_hour = self.work_patterns.day_start_hour
        end_hour = self.work_patterns.day_end_hour
        alignment = 0.0
        current_hour = start_hour

        for task in ordering:
            if current_hour in self.peak_hours:
                alignment += priority_weight(task.priority)

            current_hour += math.ceil(task.estimated_minutes / 60)
            if current_hour >= end_hour:
                current_hour = start_hour

        return alignment / (len(ordering) * MAX_PRIORITY_WEIGHT)

    def deadline_adherence(self, ordering: Sequence[Task]) -> float:
        """Average deadline credit over tasks that carry a due time (1.0 when none do)."""
        score = 0.0
        with_deadlines = 0
        current_time = self.now

        for task in ordering:
            current_time = current_time + timedelta(minutes=task.estimated_minutes)
            if task.due is None:
                continue

            with_deadlines += 1
            remaining = hours_until(task.due, current_time)
            if remaining >= 0:
                score += 1.0
            else:
                score += max(0.0, 1.0 + remaining / OVERDUE_GRACE_HOURS)

        return score / with_deadlines if with_deadlines > 0 else 1.0
