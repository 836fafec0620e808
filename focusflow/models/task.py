"""Task data model for focusflow."""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class TaskCategory(str, Enum):
    """Task category enumeration.

    Declaration order is significant: the ordinal of a category is used as a
    numeric feature by the estimators.
    """
    GENERAL = "general"
    CODING = "coding"
    WRITING = "writing"
    MEETING = "meeting"
    RESEARCH = "research"
    DESIGN = "design"
    PLANNING = "planning"
    REVIEW = "review"
    TESTING = "testing"
    DOCUMENTATION = "documentation"
    COMMUNICATION = "communication"

    @property
    def ordinal(self) -> int:
        return list(TaskCategory).index(self)


class TaskPriority(str, Enum):
    """Task priority enumeration (ordered low < medium < high < critical)."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def ordinal(self) -> int:
        return list(TaskPriority).index(self)


class Task(BaseModel):
    """Canonical Task model."""

    id: str = Field(..., description="Unique, stable task identifier")
    title: str = Field(..., description="Task title")
    description: str = Field("", description="Task description")
    category: TaskCategory = Field(TaskCategory.GENERAL, description="Task category")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    due: Optional[datetime] = Field(None, description="Optional due timestamp")
    estimated_minutes: int = Field(
        25,
        ge=5,
        le=240,
        description="Estimated duration in minutes (produced or overridden by estimation)",
    )


class CompletionEvent(BaseModel):
    """Historical record of a finished task, read by the similarity estimator."""

    model_config = ConfigDict(frozen=True)

    task_id: Optional[str] = Field(None, description="ID of the completed task, if known")
    category: TaskCategory = Field(..., description="Category of the completed task")
    priority: TaskPriority = Field(..., description="Priority of the completed task")
    actual_minutes: int = Field(..., ge=1, description="Actual elapsed minutes")
    estimated_minutes: Optional[int] = Field(None, ge=1, description="Estimate at the time the task was planned")
    complexity: Optional[float] = Field(
        None, ge=0.0, le=1.0, description="Complexity score of the completed task (0.5 when unknown)"
    )
    completed_at: Optional[datetime] = Field(None, description="Completion timestamp")
