"""Estimation data models for focusflow."""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from focusflow.models.task import TaskCategory, TaskPriority


# Ordered feature dimensions. Estimators that weight features positionally
# rely on this order.
FEATURE_NAMES = (
    "title_length",
    "description_length",
    "word_count",
    "technical_density",
    "complexity",
    "urgency_indicators",
    "category",
    "priority",
    "hour_of_day",
    "day_of_week",
    "is_weekend",
    "user_experience",
    "current_workload",
    "energy_level",
)


class EstimationContext(BaseModel):
    """Caller-supplied context for an estimation call."""

    model_config = ConfigDict(frozen=True)

    experience: Optional[float] = Field(None, ge=0.0, le=1.0, description="User experience with this kind of task")
    workload: Optional[float] = Field(None, ge=0.0, le=1.0, description="Current workload")
    energy: Optional[float] = Field(None, ge=0.0, le=1.0, description="Current energy level")
    now: Optional[datetime] = Field(None, description="Instant used for the temporal features")


class FeatureVector(BaseModel):
    """Normalized numeric description of a task. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    title_length: float
    description_length: float
    word_count: float
    technical_density: float
    complexity: float
    urgency_indicators: float
    category: float
    priority: float
    hour_of_day: float
    day_of_week: float
    is_weekend: float
    user_experience: float
    current_workload: float
    energy_level: float

    def values(self) -> List[float]:
        """Feature values in FEATURE_NAMES order."""
        return [getattr(self, name) for name in FEATURE_NAMES]

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in FEATURE_NAMES}


class TaskSubtask(BaseModel):
    """Suggested phase of a larger task."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    estimated_minutes: int


class EstimateAlternative(BaseModel):
    """Scenario estimate (optimistic / realistic / pessimistic)."""

    model_config = ConfigDict(frozen=True)

    scenario: str
    minutes: int
    probability: float = Field(..., ge=0.0, le=1.0)


class TaskEstimation(BaseModel):
    """Result of a single estimation call."""

    model_config = ConfigDict(frozen=True)

    estimated_minutes: int = Field(..., ge=5, le=240, description="Fused duration estimate in minutes")
    confidence: float = Field(..., ge=0.1, le=0.95, description="Agreement-based confidence")
    complexity_score: float = Field(..., ge=0.0, le=1.0, description="Complexity feature of the task")
    factor_breakdown: Dict[str, float] = Field(default_factory=dict, description="Named factors and their values")
    suggested_breakdown: List[TaskSubtask] = Field(default_factory=list, description="Suggested sub-task phases")
    alternative_estimates: List[EstimateAlternative] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    fallback: bool = Field(False, description="Whether the rule-based fallback produced this estimate")


class TaskCategorizationResult(BaseModel):
    """Keyword-driven categorization of a task."""

    model_config = ConfigDict(frozen=True)

    suggested_category: TaskCategory
    category_confidence: float = Field(..., ge=0.0, le=1.0)
    suggested_priority: TaskPriority
    priority_reasoning: str
    smart_tags: List[str] = Field(default_factory=list)
    suggested_subtasks: List[str] = Field(default_factory=list)
