"""Configuration for focusflow.

Values come from the environment (a local `.env` file is loaded first).
"""

import os
from typing import FrozenSet, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from focusflow.models.constants import (
    DEFAULT_CROSSOVER_RATE,
    DEFAULT_GENERATIONS,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_MUTATION_RATE,
    DEFAULT_PEAK_HOURS,
    DEFAULT_POPULATION_SIZE,
    DEFAULT_WORK_HOURS_PER_DAY,
)
from focusflow.models.schedule import ScheduleConstraints

load_dotenv()


class Settings(BaseModel):
    """Runtime settings for the estimation service and optimizer."""

    generations: int = Field(DEFAULT_GENERATIONS, ge=1)
    population_size: int = Field(DEFAULT_POPULATION_SIZE, ge=2)
    mutation_rate: float = Field(DEFAULT_MUTATION_RATE, ge=0.0, le=1.0)
    crossover_rate: float = Field(DEFAULT_CROSSOVER_RATE, ge=0.0, le=1.0)
    fitness_workers: int = Field(1, ge=1)
    random_seed: Optional[int] = None
    history_limit: int = Field(DEFAULT_HISTORY_LIMIT, ge=1)
    work_hours_per_day: float = Field(DEFAULT_WORK_HOURS_PER_DAY, gt=0.0, le=24.0)
    peak_hours: FrozenSet[int] = DEFAULT_PEAK_HOURS

    def default_constraints(self) -> ScheduleConstraints:
        return ScheduleConstraints(
            work_hours_per_day=self.work_hours_per_day,
            peak_hours=self.peak_hours,
        )


def parse_peak_hours(raw: str) -> FrozenSet[int]:
    """Parse a comma-separated list of hours such as "9,10,11"."""
    return frozenset(int(part) for part in raw.split(",") if part.strip())


def get_settings() -> Settings:
    """Build settings from environment variables."""
    seed = os.getenv("FOCUSFLOW_RANDOM_SEED", "").strip()
    peak_hours = os.getenv("FOCUSFLOW_PEAK_HOURS", "").strip()

    return Settings(
        generations=int(os.getenv("FOCUSFLOW_GENERATIONS", str(DEFAULT_GENERATIONS))),
        population_size=int(os.getenv("FOCUSFLOW_POPULATION_SIZE", str(DEFAULT_POPULATION_SIZE))),
        mutation_rate=float(os.getenv("FOCUSFLOW_MUTATION_RATE", str(DEFAULT_MUTATION_RATE))),
        crossover_rate=float(os.getenv("FOCUSFLOW_CROSSOVER_RATE", str(DEFAULT_CROSSOVER_RATE))),
        fitness_workers=int(os.getenv("FOCUSFLOW_FITNESS_WORKERS", "1")),
        random_seed=int(seed) if seed else None,
        history_limit=int(os.getenv("FOCUSFLOW_HISTORY_LIMIT", str(DEFAULT_HISTORY_LIMIT))),
        work_hours_per_day=float(os.getenv("FOCUSFLOW_WORK_HOURS_PER_DAY", str(DEFAULT_WORK_HOURS_PER_DAY))),
        peak_hours=parse_peak_hours(peak_hours) if peak_hours else DEFAULT_PEAK_HOURS,
    )
