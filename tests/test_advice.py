"""Tests for schedule tips and risks (deterministic)."""

import pytest
from datetime import timedelta

from focusflow.engine.advice import (
    RISK_MULTI_WEEK,
    TIP_LONGER_BREAKS,
    TIP_PEAK_HOURS,
    TIP_SPLIT_HIGH_PRIORITY,
    generate_optimization_tips,
    identify_schedule_risks,
)
from focusflow.models.schedule import ScheduleConstraints, WorkPatterns
from focusflow.models.task import Task, TaskPriority


def _tasks(sample_task_base, specs):
    """Build tasks from (priority, minutes) pairs."""
    return [
        Task(**{**sample_task_base, "id": f"t{i}", "title": f"Task {i}", "priority": priority,
                "estimated_minutes": minutes})
        for i, (priority, minutes) in enumerate(specs)
    ]


class TestOptimizationTips:
    """Test generate_optimization_tips()."""

    def test_empty_ordering_has_no_tips(self):
        """An empty ordering should produce no tips at all."""
        assert generate_optimization_tips([]) == []

    def test_peak_hours_tip_always_last(self, sample_task_base):
        """A short, low-priority ordering should only get the peak-hours tip."""
        tasks = _tasks(sample_task_base, [(TaskPriority.LOW, 30)])
        assert generate_optimization_tips(tasks) == [TIP_PEAK_HOURS]

    def test_split_tip_when_high_priority_dominates(self, sample_task_base):
        """One critical task out of two (50%) should trigger the split tip."""
        tasks = _tasks(sample_task_base, [(TaskPriority.CRITICAL, 30), (TaskPriority.LOW, 90)])
        assert generate_optimization_tips(tasks) == [TIP_SPLIT_HIGH_PRIORITY, TIP_PEAK_HOURS]

    def test_no_split_tip_at_thirty_percent(self, sample_task_base):
        """Exactly 30% high-priority tasks should not trigger the split tip."""
        specs = [(TaskPriority.HIGH, 5)] * 3 + [(TaskPriority.LOW, 5)] * 7
        tips = generate_optimization_tips(_tasks(sample_task_base, specs))
        assert TIP_SPLIT_HIGH_PRIORITY not in tips

    def test_split_tip_above_thirty_percent(self, sample_task_base):
        """Four high-priority tasks out of ten should trigger the split tip."""
        specs = [(TaskPriority.HIGH, 5)] * 4 + [(TaskPriority.LOW, 5)] * 6
        tips = generate_optimization_tips(_tasks(sample_task_base, specs))
        assert TIP_SPLIT_HIGH_PRIORITY in tips

    def test_break_tip_over_two_hours(self, sample_task_base):
        """Cumulative work beyond 120 minutes should trigger the break tip once."""
        tasks = _tasks(sample_task_base, [(TaskPriority.LOW, 90), (TaskPriority.LOW, 31), (TaskPriority.LOW, 60)])
        tips = generate_optimization_tips(tasks)

        assert tips == [TIP_LONGER_BREAKS, TIP_PEAK_HOURS]

    def test_no_break_tip_at_exactly_two_hours(self, sample_task_base):
        """Exactly 120 cumulative minutes should not trigger the break tip."""
        tasks = _tasks(sample_task_base, [(TaskPriority.LOW, 90), (TaskPriority.LOW, 30)])
        assert TIP_LONGER_BREAKS not in generate_optimization_tips(tasks)

    def test_long_sessions_raise_break_threshold(self, sample_task_base):
        """A 180-minute average session should suppress the break tip at 150 minutes."""
        tasks = _tasks(sample_task_base, [(TaskPriority.LOW, 90), (TaskPriority.LOW, 60)])

        assert TIP_LONGER_BREAKS in generate_optimization_tips(tasks, WorkPatterns())
        assert TIP_LONGER_BREAKS not in generate_optimization_tips(
            tasks, WorkPatterns(average_session_length=180)
        )

    def test_short_sessions_keep_default_threshold(self, sample_task_base):
        """Sessions shorter than two hours should not lower the break threshold."""
        tasks = _tasks(sample_task_base, [(TaskPriority.LOW, 60), (TaskPriority.LOW, 60)])
        tips = generate_optimization_tips(tasks, WorkPatterns(average_session_length=25))
        assert TIP_LONGER_BREAKS not in tips

    def test_all_tips_in_order(self, sample_task_base):
        """Split, break and peak-hours tips should appear in that order."""
        tasks = _tasks(sample_task_base, [(TaskPriority.CRITICAL, 100), (TaskPriority.HIGH, 100)])
        assert generate_optimization_tips(tasks) == [TIP_SPLIT_HIGH_PRIORITY, TIP_LONGER_BREAKS, TIP_PEAK_HOURS]


class TestScheduleRisks:
    """Test identify_schedule_risks()."""

    def test_empty_ordering_has_no_risks(self, fixed_now):
        """An empty ordering should produce no risks."""
        assert identify_schedule_risks([], now=fixed_now) == []

    def test_tight_deadline_named(self, task_with_deadline, fixed_now):
        """A task due within 24 hours should be reported by title."""
        assert identify_schedule_risks([task_with_deadline], now=fixed_now) == [
            'Task "Team sync" has a tight deadline'
        ]

    def test_distant_deadline_not_reported(self, sample_task_base, fixed_now):
        """A task due in three days should not be reported."""
        task = Task(**{**sample_task_base, "due": fixed_now + timedelta(days=3)})
        assert identify_schedule_risks([task], now=fixed_now) == []

    def test_multi_week_at_six_days(self, sample_task_base, fixed_now):
        """Six full work days of tasks should be flagged as spanning multiple weeks."""
        tasks = _tasks(sample_task_base, [(TaskPriority.LOW, 240)] * 12)
        assert identify_schedule_risks(tasks, ScheduleConstraints(), fixed_now) == [RISK_MULTI_WEEK]

    def test_no_multi_week_at_five_days(self, sample_task_base, fixed_now):
        """Exactly five full work days should not be flagged."""
        tasks = _tasks(sample_task_base, [(TaskPriority.LOW, 240)] * 10)
        assert identify_schedule_risks(tasks, ScheduleConstraints(), fixed_now) == []

    def test_shorter_work_days_stretch_schedule(self, sample_task_base, fixed_now):
        """Halving the work day should push the same tasks past five days."""
        tasks = _tasks(sample_task_base, [(TaskPriority.LOW, 240)] * 6)

        assert identify_schedule_risks(tasks, ScheduleConstraints(work_hours_per_day=8.0), fixed_now) == []
        assert identify_schedule_risks(tasks, ScheduleConstraints(work_hours_per_day=4.0), fixed_now) == [
            RISK_MULTI_WEEK
        ]
