"""Data models for focusflow."""

from focusflow.models.task import Task, TaskCategory, TaskPriority, CompletionEvent
from focusflow.models.estimation import (
    EstimationContext,
    FeatureVector,
    TaskSubtask,
    EstimateAlternative,
    TaskEstimation,
    TaskCategorizationResult,
)
from focusflow.models.schedule import (
    ScheduleConstraints,
    WorkPatterns,
    ScheduledTask,
    ScheduleOptimizationResult,
)

__all__ = [
    "Task",
    "TaskCategory",
    "TaskPriority",
    "CompletionEvent",
    "EstimationContext",
    "FeatureVector",
    "TaskSubtask",
    "EstimateAlternative",
    "TaskEstimation",
    "TaskCategorizationResult",
    "ScheduleConstraints",
    "WorkPatterns",
    "ScheduledTask",
    "ScheduleOptimizationResult",
]
