"""Feature extraction for duration estimation.

Turns a task's text and metadata into a normalized FeatureVector. Extraction
is pure: the clock is an input (EstimationContext.now or the `now` argument),
so identical inputs always produce identical vectors.
"""

import re
from datetime import datetime
from typing import List, Optional

from focusflow.engine.tiering import normalized_category, normalized_priority, utc_now
from focusflow.models.constants import NEUTRAL_CONTEXT_VALUE
from focusflow.models.estimation import EstimationContext, FeatureVector
from focusflow.models.task import TaskCategory, TaskPriority


TECHNICAL_TERMS = frozenset({
    "api", "database", "algorithm", "code", "implement", "debug", "test",
    "deploy", "optimize", "refactor", "integrate", "develop", "program",
    "script", "query", "function", "variable",
})

COMPLEXITY_TERMS = ("complex", "difficult", "challenging", "advanced", "comprehensive")

URGENCY_TERMS = ("urgent", "asap", "immediate", "critical", "emergency", "deadline", "rush")

_TOKEN_SPLIT = re.compile(r"\W+")


def tokenize(text: str) -> List[str]:
    """Lowercase and split on non-word characters, dropping empty tokens."""
    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


def technical_density(text: str) -> float:
    """Fraction of tokens that belong to the technical vocabulary."""
    tokens = tokenize(text)
    if not tokens:
        return 0.0
    technical_count = sum(1 for token in tokens if token in TECHNICAL_TERMS)
    return technical_count / len(tokens)


def task_complexity(title: str, description: str) -> float:
    """Complexity score in [0, 1] from length, technical density and signal words."""
    text = f"{title} {description}"
    words = text.split()
    tokens = set(tokenize(text))

    complexity = min(len(words) / 50.0, 0.5)
    complexity += technical_density(text) * 0.3
    complexity += 0.1 * sum(1 for term in COMPLEXITY_TERMS if term in tokens)

    return min(max(complexity, 0.0), 1.0)


def urgency_indicators(title: str, description: str) -> float:
    """Share of the urgency vocabulary present in the text."""
    tokens = set(tokenize(f"{title} {description}"))
    count = sum(1 for term in URGENCY_TERMS if term in tokens)
    return count / len(URGENCY_TERMS)


def _context_value(value: Optional[float]) -> float:
    return NEUTRAL_CONTEXT_VALUE if value is None else float(value)


def extract_features(
    title: str,
    description: str,
    category: TaskCategory,
    priority: TaskPriority,
    context: Optional[EstimationContext] = None,
    now: Optional[datetime] = None,
) -> FeatureVector:
    """Build the feature vector for a task.

    Args:
        title: Task title
        description: Task description (may be empty)
        category: Task category
        priority: Task priority
        context: Optional caller context (experience, workload, energy, now)
        now: Fallback instant for temporal features when context.now is unset

    Returns:
        FeatureVector with every dimension populated
    """
    title = title or ""
    description = description or ""
    context = context or EstimationContext()

    instant = context.now or now or utc_now()
    weekday = instant.isoweekday()

    return FeatureVector(
        title_length=len(title) / 100.0,
        description_length=len(description) / 1000.0,
        word_count=(len(title.split()) + len(description.split())) / 50.0,
        technical_density=technical_density(f"{title} {description}"),
        complexity=task_complexity(title, description),
        urgency_indicators=urgency_indicators(title, description),
        category=normalized_category(category),
        priority=normalized_priority(priority),
        hour_of_day=instant.hour / 24.0,
        day_of_week=weekday / 7.0,
        is_weekend=1.0 if weekday >= 6 else 0.0,
        user_experience=_context_value(context.experience),
        current_workload=_context_value(context.workload),
        energy_level=_context_value(context.energy),
    )
