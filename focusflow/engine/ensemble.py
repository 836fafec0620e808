"""Ensemble aggregation of duration estimates."""

import math
from typing import List, Sequence

from focusflow.models.constants import (
    DEFAULT_DURATION_MINUTES,
    FALLBACK_CONFIDENCE,
    MAX_CONFIDENCE,
    MAX_DURATION_MIN,
    MIN_CONFIDENCE,
    MIN_DURATION_MIN,
)
from focusflow.models.estimation import EstimateAlternative


# Linear, rule-based, similarity, pseudo-neural
ENSEMBLE_WEIGHTS = (0.3, 0.4, 0.2, 0.1)

OPTIMISTIC_FACTOR = 0.8
PESSIMISTIC_FACTOR = 1.3


def ensemble_prediction(predictions: Sequence[float], weights: Sequence[float] = ENSEMBLE_WEIGHTS) -> float:
    """Weighted fusion of the estimator outputs, clamped to [5, 240]."""
    if not predictions:
        return float(DEFAULT_DURATION_MINUTES)

    weighted = sum(p * w for p, w in zip(predictions, weights))
    return min(max(weighted, MIN_DURATION_MIN), MAX_DURATION_MIN)


def calculate_confidence(predictions: Sequence[float]) -> float:
    """Agreement-based confidence: 1 - clamp(stddev / mean, 0, 0.9), clamped to [0.1, 0.95]."""
    if len(predictions) < 2:
        return FALLBACK_CONFIDENCE

    mean = sum(predictions) / len(predictions)
    if mean <= 0:
        return MIN_CONFIDENCE

    variance = sum((p - mean) ** 2 for p in predictions) / len(predictions)
    std_dev = math.sqrt(variance)

    confidence = 1.0 - min(max(std_dev / mean, 0.0), 0.9)
    return min(max(confidence, MIN_CONFIDENCE), MAX_CONFIDENCE)


def generate_alternatives(prediction: float, confidence: float) -> List[EstimateAlternative]:
    """Optimistic / realistic / pessimistic scenarios derived from the fused estimate."""
    return [
        EstimateAlternative(
            scenario="Optimistic",
            minutes=round(prediction * OPTIMISTIC_FACTOR),
            probability=confidence * 0.3,
        ),
        EstimateAlternative(
            scenario="Realistic",
            minutes=round(prediction),
            probability=confidence,
        ),
        EstimateAlternative(
            scenario="Pessimistic",
            minutes=round(prediction * PESSIMISTIC_FACTOR),
            probability=confidence * 0.7,
        ),
    ]
