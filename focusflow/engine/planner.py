"""End-to-end planning: estimate every task, then optimize the ordering."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from focusflow.engine.intelligence import TaskIntelligenceService
from focusflow.engine.optimizer import GeneticScheduleOptimizer
from focusflow.models.estimation import EstimationContext, TaskEstimation
from focusflow.models.schedule import ScheduleConstraints, ScheduleOptimizationResult, WorkPatterns
from focusflow.models.task import CompletionEvent, Task

logger = logging.getLogger(__name__)


class PlanResult:
    """Result of planning operation."""

    def __init__(self):
        self.tasks: List[Task] = []
        self.estimations: Dict[str, TaskEstimation] = {}
        self.optimization: Optional[ScheduleOptimizationResult] = None


def plan_schedule(
    tasks: List[Task],
    service: TaskIntelligenceService,
    optimizer: GeneticScheduleOptimizer,
    constraints: Optional[ScheduleConstraints] = None,
    work_patterns: Optional[WorkPatterns] = None,
    history: Optional[Iterable[CompletionEvent]] = None,
    estimate_durations: bool = True,
    context: Optional[EstimationContext] = None,
    **optimize_kwargs: Any,
) -> PlanResult:
    """Estimate task durations and optimize their ordering.

    Args:
        tasks: Pending tasks
        service: Estimation service (receives `history` before estimating)
        optimizer: Schedule optimizer
        constraints: Work-hours and peak-hour constraints
        work_patterns: Observed work habits
        history: Completion events to learn from first
        estimate_durations: Re-estimate each task's duration when True; keep
            the tasks' own estimated_minutes when False
        context: Estimation context shared by all tasks
        **optimize_kwargs: Passed through to GeneticScheduleOptimizer.optimize

    Returns:
        PlanResult with the (re-estimated) tasks, estimations and optimization
    """
    result = PlanResult()

    for event in history or []:
        service.learn_from_completion(event)

    confidences: Optional[Dict[str, float]] = None
    if estimate_durations:
        confidences = {}
        for task in tasks:
            updated, estimation = service.estimate_task(task, context)
            result.tasks.append(updated)
            result.estimations[task.id] = estimation
            confidences[task.id] = estimation.confidence
    else:
        result.tasks = list(tasks)

    logger.debug(f"Planning {len(result.tasks)} tasks (estimated={estimate_durations})")

    result.optimization = optimizer.optimize(
        result.tasks,
        constraints=constraints,
        work_patterns=work_patterns,
        confidences=confidences,
        **optimize_kwargs,
    )
    return result
