"""FastAPI dependencies for focusflow services."""

from fastapi import Request

from focusflow.config import Settings
from focusflow.engine.intelligence import TaskIntelligenceService
from focusflow.engine.optimizer import GeneticScheduleOptimizer


def get_settings_dependency(request: Request) -> Settings:
    """Settings the app was built with."""
    return request.app.state.settings


def get_intelligence_service(request: Request) -> TaskIntelligenceService:
    """Estimation service owned by the app.

    The service carries the rolling completion history, so every request
    sees the same instance.
    """
    return request.app.state.intelligence


def get_optimizer(request: Request) -> GeneticScheduleOptimizer:
    """Schedule optimizer owned by the app."""
    return request.app.state.optimizer
