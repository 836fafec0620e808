"""Duration estimators for focusflow.

Four independent estimators, each mapping a FeatureVector to minutes:
- weighted-linear
- rule-based
- similarity (nearest-neighbour over completion history)
- pseudo-neural (fixed sinusoidal projection, not trained)

Each is a plain function of its inputs; none keeps state between calls.
"""

import math
from typing import Iterable, List, Sequence

from focusflow.engine.tiering import CATEGORY_COUNT, normalized_category, normalized_priority
from focusflow.models.estimation import FeatureVector
from focusflow.models.task import CompletionEvent, TaskCategory


BASE_ESTIMATE_MINUTES = 25.0

LINEAR_WEIGHTS = (0.5, 0.3, 0.2, 0.4, 0.6, 0.1, 0.2, 0.3)
LINEAR_SCALE = 30.0

CATEGORY_TIERS = {
    TaskCategory.CODING: 1.8,
    TaskCategory.RESEARCH: 1.6,
    TaskCategory.WRITING: 1.4,
    TaskCategory.DOCUMENTATION: 1.2,
    TaskCategory.DESIGN: 1.2,
}

SIMILARITY_THRESHOLD = 0.3
UNKNOWN_EVENT_COMPLEXITY = 0.5

HIDDEN_UNITS = 5


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def sigmoid(x: float) -> float:
    return 1.0 / (1.0 + math.exp(-x))


def linear_regression_estimate(
    features: FeatureVector, weights: Sequence[float] = LINEAR_WEIGHTS
) -> float:
    """Base estimate plus a weighted sum of the leading features, clamped to [5, 240]."""
    prediction = BASE_ESTIMATE_MINUTES
    for value, weight in zip(features.values(), weights):
        prediction += value * weight * LINEAR_SCALE
    return _clamp(prediction, 5.0, 240.0)


def category_from_feature(value: float) -> TaskCategory:
    """Recover the category from its normalized encoding."""
    ordinal = int(round(value * CATEGORY_COUNT))
    ordinal = int(_clamp(ordinal, 0, CATEGORY_COUNT - 1))
    return list(TaskCategory)[ordinal]


def rule_based_estimate(features: FeatureVector) -> float:
    """Category tier x complexity x priority heuristic, clamped to [10, 180]."""
    base = BASE_ESTIMATE_MINUTES
    base *= CATEGORY_TIERS.get(category_from_feature(features.category), 1.0)
    base *= 0.5 + features.complexity
    base *= 0.8 + features.priority * 0.4
    return _clamp(base, 10.0, 180.0)


def cosine_similarity(left: Sequence[float], right: Sequence[float]) -> float:
    """Cosine similarity of two equal-length vectors (0.0 for a zero vector)."""
    dot = sum(a * b for a, b in zip(left, right))
    norm_left = math.sqrt(sum(a * a for a in left))
    norm_right = math.sqrt(sum(b * b for b in right))
    if norm_left == 0 or norm_right == 0:
        return 0.0
    return dot / (norm_left * norm_right)


def event_signature(event: CompletionEvent) -> List[float]:
    """(complexity, category, priority) representation of a completion event."""
    complexity = UNKNOWN_EVENT_COMPLEXITY if event.complexity is None else event.complexity
    return [
        complexity,
        normalized_category(event.category),
        normalized_priority(event.priority),
    ]


def feature_signature(features: FeatureVector) -> List[float]:
    return [features.complexity, features.category, features.priority]


def similarity_estimate(features: FeatureVector, history: Iterable[CompletionEvent]) -> float:
    """Similarity-weighted mean of historical durations.

    Only events whose similarity exceeds SIMILARITY_THRESHOLD contribute.
    Falls back to the rule-based estimate when history is empty or no event
    is similar enough.
    """
    signature = feature_signature(features)
    total_similarity = 0.0
    weighted_duration = 0.0

    for event in history:
        similarity = cosine_similarity(signature, event_signature(event))
        if similarity > SIMILARITY_THRESHOLD:
            total_similarity += similarity
            weighted_duration += event.actual_minutes * similarity

    if total_similarity > 0:
        return _clamp(weighted_duration / total_similarity, 5.0, 240.0)

    return rule_based_estimate(features)


def neural_estimate(features: FeatureVector) -> float:
    """Fixed-topology pseudo-neural transform, clamped to [10, 200].

    Hidden weights come from sin(i * j + 1) * 0.5, so the output depends only
    on the inputs.
    """
    inputs = features.values()
    hidden = []
    for i in range(HIDDEN_UNITS):
        total = 0.0
        for j, value in enumerate(inputs):
            total += value * math.sin(i * j + 1.0) * 0.5
        hidden.append(sigmoid(total))

    output = sum(h * (0.5 + i * 0.1) for i, h in enumerate(hidden))
    return _clamp(output * 60.0 + 20.0, 10.0, 200.0)
