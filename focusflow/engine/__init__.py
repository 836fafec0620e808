"""Estimation and scheduling engine for focusflow."""

from focusflow.engine.features import extract_features
from focusflow.engine.intelligence import TaskIntelligenceService
from focusflow.engine.fitness import ScheduleFitnessEvaluator
from focusflow.engine.optimizer import GeneticScheduleOptimizer, InvalidConfiguration
from focusflow.engine.scheduler import materialize_schedule
from focusflow.engine.planner import plan_schedule, PlanResult

__all__ = [
    "extract_features",
    "TaskIntelligenceService",
    "ScheduleFitnessEvaluator",
    "GeneticScheduleOptimizer",
    "InvalidConfiguration",
    "materialize_schedule",
    "plan_schedule",
    "PlanResult",
]
