"""Tests for schedule fitness evaluation (deterministic)."""

import pytest
from datetime import timedelta

from focusflow.engine.fitness import ScheduleFitnessEvaluator
from focusflow.models.schedule import ScheduleConstraints, WorkPatterns
from focusflow.models.task import Task, TaskPriority


@pytest.fixture
def evaluator(constraints, work_patterns, fixed_now):
    return ScheduleFitnessEvaluator(constraints, work_patterns, fixed_now)


def _task(sample_task_base, task_id, **overrides):
    return Task(**{**sample_task_base, "id": task_id, **overrides})


class TestEvaluate:
    """Test evaluate()."""

    def test_empty_ordering_scores_zero(self, evaluator):
        """An empty ordering should score zero."""
        assert evaluator.evaluate([]) == 0.0

    def test_within_bounds(self, evaluator, scenario_tasks):
        """Fitness should stay within 0-100."""
        fitness = evaluator.evaluate(scenario_tasks)
        assert 0.0 <= fitness <= 100.0

    def test_deterministic(self, evaluator, scenario_tasks):
        """Same ordering should produce the same fitness."""
        assert evaluator.evaluate(scenario_tasks) == evaluator.evaluate(scenario_tasks)

    def test_best_ordering_beats_reverse(self, evaluator, critical_task, task_with_deadline, long_task):
        """Critical first and deadline kept should beat the reverse ordering."""
        best = evaluator.evaluate([critical_task, task_with_deadline, long_task])
        worst = evaluator.evaluate([long_task, task_with_deadline, critical_task])
        assert best > worst

    def test_single_critical_task_in_peak_hour(self, evaluator, critical_task):
        """A lone critical task in a peak hour should score the maximum."""
        # Every sub-score is 1.0
        assert evaluator.evaluate([critical_task]) == pytest.approx(100.0)


class TestCompletionFeasibility:
    """Test completion_feasibility()."""

    def test_tasks_roll_over_days(self, evaluator, sample_task_base):
        """Full-day tasks should roll over to new days and stay feasible."""
        tasks = [_task(sample_task_base, str(i), estimated_minutes=240) for i in range(3)]
        assert evaluator.completion_feasibility(tasks) == 1.0

    def test_task_longer_than_a_day(self, fixed_now, sample_task_base):
        """A task longer than the work day should be infeasible."""
        evaluator = ScheduleFitnessEvaluator(ScheduleConstraints(work_hours_per_day=1.0), now=fixed_now)
        task = _task(sample_task_base, "long", estimated_minutes=90)
        assert evaluator.completion_feasibility([task]) == 0.0


class TestPriorityOptimization:
    """Test priority_optimization()."""

    def test_high_priority_first_scores_higher(self, evaluator, sample_task_base):
        """Placing the critical task first should score higher."""
        critical = _task(sample_task_base, "c", priority=TaskPriority.CRITICAL)
        low = _task(sample_task_base, "l", priority=TaskPriority.LOW)

        assert evaluator.priority_optimization([critical, low]) == pytest.approx(0.9)
        assert evaluator.priority_optimization([low, critical]) == pytest.approx(0.6)

    def test_single_task(self, evaluator, sample_task):
        """A single task should get full priority credit."""
        assert evaluator.priority_optimization([sample_task]) == pytest.approx(1.0)


class TestWorkPatternAlignment:
    """Test work_pattern_alignment()."""

    def test_critical_in_peak_hour(self, evaluator, critical_task):
        """A critical task at 9:00 should fully align with peak hours."""
        assert evaluator.work_pattern_alignment([critical_task]) == pytest.approx(1.0)

    def test_low_priority_in_peak_hour(self, evaluator, long_task):
        """A low-priority task in a peak hour should earn a quarter."""
        assert evaluator.work_pattern_alignment([long_task]) == pytest.approx(0.25)

    def test_work_patterns_override_peak_hours(self, constraints, fixed_now, critical_task):
        """Work-pattern peak hours should replace the constraint peak hours."""
        evaluator = ScheduleFitnessEvaluator(constraints, WorkPatterns(peak_hours=frozenset({16})), fixed_now)
        assert evaluator.work_pattern_alignment([critical_task]) == 0.0

    def test_bounded(self, evaluator, sample_task_base):
        """Alignment should stay within 0-1 for many tasks."""
        tasks = [_task(sample_task_base, str(i), priority=TaskPriority.CRITICAL, estimated_minutes=5)
                 for i in range(10)]
        assert 0.0 <= evaluator.work_pattern_alignment(tasks) <= 1.0


class TestDeadlineAdherence:
    """Test deadline_adherence()."""

    def test_no_deadlines(self, evaluator, sample_task):
        """Orderings without due times should get full deadline credit."""
        assert evaluator.deadline_adherence([sample_task]) == 1.0

    def test_met_deadline(self, evaluator, task_with_deadline):
        """A task finishing before its due time should get full credit."""
        assert evaluator.deadline_adherence([task_with_deadline]) == 1.0

    def test_completion_after_due_loses_credit(self, evaluator, sample_task_base, fixed_now):
        """Finishing after the due time should lose credit pro rata over 24 hours."""
        # Starts on time but finishes 30 minutes late
        task = _task(sample_task_base, "late", due=fixed_now, estimated_minutes=30)
        assert evaluator.deadline_adherence([task]) == pytest.approx(1.0 - 0.5 / 24)

    def test_far_overdue_scores_zero(self, evaluator, sample_task_base, fixed_now):
        """A task more than a day overdue should get no credit."""
        task = _task(sample_task_base, "old", due=fixed_now - timedelta(days=3))
        assert evaluator.deadline_adherence([task]) == 0.0

    def test_position_matters(self, evaluator, sample_task_base, fixed_now):
        """Scheduling a due task later should lower deadline adherence."""
        due_soon = _task(sample_task_base, "due", due=fixed_now + timedelta(minutes=60), estimated_minutes=30)
        long_first = _task(sample_task_base, "long", estimated_minutes=120)

        assert evaluator.deadline_adherence([due_soon, long_first]) > \
            evaluator.deadline_adherence([long_first, due_soon])
