"""Constants for focusflow.

This module centralizes all magic numbers and default values used throughout the application.
"""

from focusflow.models.task import TaskCategory, TaskPriority


# Task defaults
DEFAULT_DURATION_MINUTES = 25
DEFAULT_CATEGORY = TaskCategory.GENERAL
DEFAULT_PRIORITY = TaskPriority.MEDIUM

# Duration constraints
MIN_DURATION_MIN = 5
MAX_DURATION_MIN = 240

# Estimation confidence
MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 0.95
FALLBACK_CONFIDENCE = 0.6

# Rolling completion history
DEFAULT_HISTORY_LIMIT = 1000

# Context defaults (experience, workload, energy)
NEUTRAL_CONTEXT_VALUE = 0.5

# Scheduling
DEFAULT_WORK_HOURS_PER_DAY = 8.0
DEFAULT_PEAK_HOURS = frozenset({9, 10, 11, 14, 15})
DAY_START_HOUR = 9
DAY_END_HOUR = 18
INTER_TASK_BUFFER_MINUTES = 5
DEFAULT_SCHEDULED_CONFIDENCE = 0.8

# Genetic search defaults
DEFAULT_GENERATIONS = 100
DEFAULT_POPULATION_SIZE = 50
DEFAULT_MUTATION_RATE = 0.1
DEFAULT_CROSSOVER_RATE = 0.8
ELITE_FRACTION = 0.1
TOURNAMENT_SIZE = 3
