"""FastAPI web application for focusflow."""

import logging
from datetime import datetime
from typing import Dict, List, Optional
from fastapi import Depends, FastAPI, HTTPException, status
from pydantic import BaseModel, Field

from focusflow.api.dependencies import get_intelligence_service, get_optimizer, get_settings_dependency
from focusflow.config import Settings, get_settings
from focusflow.engine.intelligence import TaskIntelligenceService
from focusflow.engine.optimizer import GeneticScheduleOptimizer, InvalidConfiguration
from focusflow.engine.planner import plan_schedule
from focusflow.models.constants import DEFAULT_CATEGORY, DEFAULT_PRIORITY
from focusflow.models.estimation import EstimationContext, TaskCategorizationResult, TaskEstimation
from focusflow.models.schedule import ScheduleConstraints, ScheduleOptimizationResult, WorkPatterns
from focusflow.models.task import CompletionEvent, Task, TaskCategory, TaskPriority

logger = logging.getLogger(__name__)


# Request models
class EstimateRequest(BaseModel):
    """Request body for duration estimation."""
    title: str = Field(..., min_length=1)
    description: str = ""
    category: TaskCategory = DEFAULT_CATEGORY
    priority: TaskPriority = DEFAULT_PRIORITY
    context: Optional[EstimationContext] = None


class CategorizeRequest(BaseModel):
    """Request body for task categorization."""
    title: str = Field(..., min_length=1)
    description: str = ""


class OptimizeRequest(BaseModel):
    """Request body for schedule optimization."""
    tasks: List[Task]
    constraints: Optional[ScheduleConstraints] = None
    work_patterns: Optional[WorkPatterns] = None
    generations: Optional[int] = None
    population_size: Optional[int] = None
    mutation_rate: Optional[float] = None
    crossover_rate: Optional[float] = None
    estimate_durations: bool = Field(False, description="Re-estimate task durations before optimizing")
    seed: Optional[int] = Field(None, description="Seed for a reproducible run")
    start_time: Optional[datetime] = None


# Response models
class CompletionResponse(BaseModel):
    """Response for a recorded completion event."""
    history_size: int


class OptimizeResponse(BaseModel):
    """Response for schedule optimization."""
    optimization: ScheduleOptimizationResult
    estimated_minutes: Dict[str, int] = Field(
        default_factory=dict, description="Map of task id to the duration used for scheduling"
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app with its own service objects."""
    settings = settings or get_settings()

    app = FastAPI(
        title="focusflow API",
        description="Task duration estimation and schedule optimization",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.intelligence = TaskIntelligenceService(history_limit=settings.history_limit)
    app.state.optimizer = GeneticScheduleOptimizer(
        seed=settings.random_seed, workers=settings.fitness_workers
    )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok"}

    @app.post("/estimate", response_model=TaskEstimation)
    def estimate(
        request: EstimateRequest,
        service: TaskIntelligenceService = Depends(get_intelligence_service),
    ):
        """Estimate the duration of a task."""
        return service.estimate(
            request.title,
            request.description,
            request.category,
            request.priority,
            request.context,
        )

    @app.post("/categorize", response_model=TaskCategorizationResult)
    def categorize(
        request: CategorizeRequest,
        service: TaskIntelligenceService = Depends(get_intelligence_service),
    ):
        """Suggest category, priority, tags and subtasks for a task."""
        return service.categorize(request.title, request.description)

    @app.post("/completions", response_model=CompletionResponse, status_code=status.HTTP_201_CREATED)
    def record_completion(
        event: CompletionEvent,
        service: TaskIntelligenceService = Depends(get_intelligence_service),
    ):
        """Record a completed task for future similarity estimates."""
        service.learn_from_completion(event)
        return CompletionResponse(history_size=len(service.history))

    @app.post("/optimize", response_model=OptimizeResponse)
    def optimize(
        request: OptimizeRequest,
        service: TaskIntelligenceService = Depends(get_intelligence_service),
        optimizer: GeneticScheduleOptimizer = Depends(get_optimizer),
        app_settings: Settings = Depends(get_settings_dependency),
    ):
        """Optimize the ordering of the given tasks."""
        if request.seed is not None:
            optimizer = GeneticScheduleOptimizer(seed=request.seed, workers=optimizer.workers)

        def _or_default(value, default):
            return default if value is None else value

        try:
            plan = plan_schedule(
                request.tasks,
                service,
                optimizer,
                constraints=request.constraints or app_settings.default_constraints(),
                work_patterns=request.work_patterns,
                estimate_durations=request.estimate_durations,
                generations=_or_default(request.generations, app_settings.generations),
                population_size=_or_default(request.population_size, app_settings.population_size),
                mutation_rate=_or_default(request.mutation_rate, app_settings.mutation_rate),
                crossover_rate=_or_default(request.crossover_rate, app_settings.crossover_rate),
                start_time=request.start_time,
            )
        except InvalidConfiguration as e:
            raise HTTPException(status_code=400, detail=str(e))

        return OptimizeResponse(
            optimization=plan.optimization,
            estimated_minutes={task.id: task.estimated_minutes for task in plan.tasks},
        )

    return app


app = create_app()
