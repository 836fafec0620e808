"""Schedule data models for focusflow."""

from datetime import datetime
from typing import FrozenSet, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from focusflow.models.constants import (
    DAY_END_HOUR,
    DAY_START_HOUR,
    DEFAULT_PEAK_HOURS,
    DEFAULT_WORK_HOURS_PER_DAY,
)


def _check_hours(hours: FrozenSet[int]) -> FrozenSet[int]:
    for hour in hours:
        if hour < 0 or hour > 23:
            raise ValueError(f"Peak hour {hour} is outside 0-23")
    return hours


class ScheduleConstraints(BaseModel):
    """Hard constraints for schedule optimization."""

    model_config = ConfigDict(frozen=True)

    work_hours_per_day: float = Field(
        DEFAULT_WORK_HOURS_PER_DAY, gt=0.0, le=24.0, description="Available work hours per day"
    )
    peak_hours: FrozenSet[int] = Field(
        DEFAULT_PEAK_HOURS, description="Hours of the day (0-23) with peak performance"
    )

    @field_validator("peak_hours")
    @classmethod
    def validate_peak_hours(cls, v: FrozenSet[int]) -> FrozenSet[int]:
        return _check_hours(v)


class WorkPatterns(BaseModel):
    """Observed work habits used by the work-pattern alignment score."""

    model_config = ConfigDict(frozen=True)

    peak_hours: Optional[FrozenSet[int]] = Field(
        None, description="Overrides ScheduleConstraints.peak_hours when set"
    )
    day_start_hour: int = Field(DAY_START_HOUR, ge=0, le=23)
    day_end_hour: int = Field(DAY_END_HOUR, ge=1, le=24)
    average_session_length: int = Field(
        45, ge=1, description="Average focus session length in minutes; raises the break-tip threshold when longer"
    )

    @field_validator("peak_hours")
    @classmethod
    def validate_peak_hours(cls, v: Optional[FrozenSet[int]]) -> Optional[FrozenSet[int]]:
        if v is None:
            return v
        return _check_hours(v)

    @model_validator(mode="after")
    def validate_day_bounds(self) -> "WorkPatterns":
        if self.day_end_hour <= self.day_start_hour:
            raise ValueError("day_end_hour must be after day_start_hour")
        return self

    def effective_peak_hours(self, constraints: ScheduleConstraints) -> FrozenSet[int]:
        if self.peak_hours is not None:
            return self.peak_hours
        return constraints.peak_hours


class ScheduledTask(BaseModel):
    """A task placed at a concrete time."""

    model_config = ConfigDict(frozen=True)

    task_id: str = Field(..., description="ID of the scheduled task")
    start_time: datetime = Field(..., description="Task start time")
    end_time: datetime = Field(..., description="Task end time")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence in the placement")


class ScheduleOptimizationResult(BaseModel):
    """Outcome of one optimize() call."""

    model_config = ConfigDict(frozen=True)

    best_schedule: List[ScheduledTask] = Field(default_factory=list)
    fitness_score: float = Field(0.0, ge=0.0, le=1.0, description="Best fitness normalized to 0-1")
    alternatives: List[ScheduledTask] = Field(
        default_factory=list, description="Runner-up ordering from the final population"
    )
    tips: List[str] = Field(default_factory=list)
    risks: List[str] = Field(default_factory=list)
    fitness_history: List[float] = Field(
        default_factory=list, description="Global-best fitness (0-100) after each generation"
    )
