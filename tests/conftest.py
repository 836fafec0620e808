"""Pytest fixtures and configuration for focusflow tests."""

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
import uuid

from focusflow.config import Settings
from focusflow.engine.intelligence import TaskIntelligenceService
from focusflow.models.estimation import EstimationContext
from focusflow.models.schedule import ScheduleConstraints, WorkPatterns
from focusflow.models.task import Task, TaskCategory, TaskPriority


@pytest.fixture
def fixed_now():
    """A fixed Wednesday morning used as the clock in deterministic tests."""
    return datetime(2024, 1, 3, 9, 0, 0)


@pytest.fixture
def sample_task_base():
    """Base task data for creating test tasks.

    Returns a dict with default task attributes that can be overridden.
    """
    return {
        "id": str(uuid.uuid4()),
        "title": "Test Task",
        "description": "Test description",
        "category": TaskCategory.GENERAL,
        "priority": TaskPriority.MEDIUM,
        "due": None,
        "estimated_minutes": 30,
    }


@pytest.fixture
def sample_task(sample_task_base):
    """Create a sample Task object for testing."""
    return Task(**sample_task_base)


@pytest.fixture
def critical_task(sample_task_base):
    """Create a critical coding task."""
    return Task(**{
        **sample_task_base,
        "id": "bug",
        "title": "Fix login bug",
        "category": TaskCategory.CODING,
        "priority": TaskPriority.CRITICAL,
        "estimated_minutes": 30,
    })


@pytest.fixture
def task_with_deadline(sample_task_base, fixed_now):
    """Create a meeting task due two hours after fixed_now."""
    return Task(**{
        **sample_task_base,
        "id": "sync",
        "title": "Team sync",
        "category": TaskCategory.MEETING,
        "priority": TaskPriority.MEDIUM,
        "due": fixed_now + timedelta(hours=2),
        "estimated_minutes": 30,
    })


@pytest.fixture
def long_task(sample_task_base):
    """Create a long, low-priority writing task."""
    return Task(**{
        **sample_task_base,
        "id": "blog",
        "title": "Write blog post",
        "category": TaskCategory.WRITING,
        "priority": TaskPriority.LOW,
        "estimated_minutes": 90,
    })


@pytest.fixture
def scenario_tasks(critical_task, task_with_deadline, long_task):
    """Three tasks with a single clearly best ordering: bug, sync, blog."""
    return [long_task, task_with_deadline, critical_task]


@pytest.fixture
def constraints():
    """Default constraints: 8 hour day, peaks at 9-11 and 14-15."""
    return ScheduleConstraints(work_hours_per_day=8.0, peak_hours=frozenset({9, 10, 11, 14, 15}))


@pytest.fixture
def work_patterns():
    """Default work patterns (09:00-18:00 day)."""
    return WorkPatterns()


@pytest.fixture
def context(fixed_now):
    """Estimation context pinned to fixed_now."""
    return EstimationContext(experience=0.5, workload=0.5, energy=0.5, now=fixed_now)


@pytest.fixture
def intelligence_service(fixed_now):
    """Estimation service with a fixed clock."""
    return TaskIntelligenceService(clock=lambda: fixed_now)


@pytest.fixture
def test_settings():
    """Small, seeded settings so API runs are quick and reproducible."""
    return Settings(
        generations=20,
        population_size=12,
        mutation_rate=0.1,
        crossover_rate=0.8,
        fitness_workers=1,
        random_seed=7,
        history_limit=50,
    )


@pytest.fixture
def test_client(test_settings):
    """Create a FastAPI test client around a freshly built app."""
    from focusflow.api.app import create_app

    app = create_app(test_settings)
    with TestClient(app) as client:
        yield client
