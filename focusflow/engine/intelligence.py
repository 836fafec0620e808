"""Task intelligence service for focusflow.

This module owns the estimation pipeline:

1. Extract features for the task
2. Run every estimator in the bank
3. Fuse the estimates and derive confidence from their agreement
4. Fall back to the rule-based estimator alone if any estimator fails

It also keeps the rolling completion history read by the similarity
estimator, and provides keyword-driven categorization.
"""

import logging
import math
from collections import deque
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from focusflow.engine.ensemble import calculate_confidence, ensemble_prediction, generate_alternatives
from focusflow.engine.estimators import (
    BASE_ESTIMATE_MINUTES,
    linear_regression_estimate,
    neural_estimate,
    rule_based_estimate,
    similarity_estimate,
)
from focusflow.engine.features import extract_features, tokenize, urgency_indicators, task_complexity
from focusflow.models.constants import (
    DEFAULT_CATEGORY,
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_PRIORITY,
    FALLBACK_CONFIDENCE,
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
)
from focusflow.models.estimation import (
    EstimationContext,
    FeatureVector,
    TaskCategorizationResult,
    TaskEstimation,
    TaskSubtask,
)
from focusflow.models.task import CompletionEvent, Task, TaskCategory, TaskPriority
from focusflow.models.task_factory import clamp_duration

logger = logging.getLogger(__name__)

Estimator = Callable[[FeatureVector, Sequence[CompletionEvent]], float]

FALLBACK_TIP = "Reduced-confidence estimate: fell back to rule-based estimation"

SUBTASK_THRESHOLD_MINUTES = 50
SUBTASK_PHASE_MINUTES = 30
LONG_TASK_MINUTES = 90
MAX_TIPS = 3


def default_estimators() -> List[Tuple[str, Estimator]]:
    """The estimator bank in ensemble-weight order."""
    return [
        ("linear", lambda features, history: linear_regression_estimate(features)),
        ("rule_based", lambda features, history: rule_based_estimate(features)),
        ("similarity", similarity_estimate),
        ("neural", lambda features, history: neural_estimate(features)),
    ]


CATEGORY_KEYWORDS: Dict[TaskCategory, Tuple[str, ...]] = {
    TaskCategory.CODING: ("code", "implement", "bug", "fix", "refactor", "debug", "api", "deploy", "feature", "function"),
    TaskCategory.WRITING: ("write", "blog", "post", "article", "draft", "essay", "copy"),
    TaskCategory.MEETING: ("meeting", "sync", "standup", "call", "interview", "1on1"),
    TaskCategory.RESEARCH: ("research", "investigate", "explore", "analyze", "study", "compare"),
    TaskCategory.DESIGN: ("design", "mockup", "wireframe", "prototype", "ui", "ux", "layout"),
    TaskCategory.PLANNING: ("plan", "roadmap", "strategy", "schedule", "estimate", "prioritize"),
    TaskCategory.REVIEW: ("review", "feedback", "approve", "audit", "inspect"),
    TaskCategory.TESTING: ("test", "qa", "verify", "validate", "regression", "login"),
    TaskCategory.DOCUMENTATION: ("document", "documentation", "docs", "readme", "manual", "guide"),
    TaskCategory.COMMUNICATION: ("email", "reply", "message", "slack", "respond", "announce", "chat"),
}

CATEGORY_SUBTASKS: Dict[TaskCategory, List[str]] = {
    TaskCategory.CODING: ["Plan approach", "Write code", "Test functionality", "Review and refactor"],
    TaskCategory.WRITING: ["Research topic", "Create outline", "Write draft", "Edit and polish"],
    TaskCategory.RESEARCH: ["Identify sources", "Gather information", "Analyze data", "Summarize findings"],
    TaskCategory.TESTING: ["Identify root cause", "Implement fix", "Verify solution"],
    TaskCategory.MEETING: ["Prepare agenda", "Hold meeting", "Send follow-ups"],
}

CATEGORY_TIPS: Dict[TaskCategory, List[str]] = {
    TaskCategory.CODING: [
        "Use the Pomodoro technique for sustained focus",
        "Have your development environment ready",
        "Break down complex algorithms into smaller steps",
    ],
    TaskCategory.WRITING: [
        "Start with an outline to organize your thoughts",
        "Minimize distractions during writing sessions",
        "Set specific word count goals",
    ],
    TaskCategory.MEETING: [
        "Prepare an agenda beforehand",
        "Set clear objectives for the meeting",
        "Have all necessary materials ready",
    ],
    TaskCategory.RESEARCH: [
        "Define the question you are answering before you start",
        "Keep notes of sources as you go",
    ],
}


class TaskIntelligenceService:
    """Duration estimation and categorization for tasks.

    The service is an explicit object: callers construct it and pass it to
    whatever needs it. Its only mutable state is the bounded completion
    history.
    """

    def __init__(
        self,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        estimators: Optional[List[Tuple[str, Estimator]]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._history: deque = deque(maxlen=history_limit)
        self._estimators = estimators if estimators is not None else default_estimators()
        self._clock = clock

    @property
    def history(self) -> Tuple[CompletionEvent, ...]:
        return tuple(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def learn_from_completion(self, event: CompletionEvent) -> None:
        """Append a completion event to the rolling history.

        Only the similarity estimator reads the history; no other estimator
        is retrained.
        """
        self._history.append(event)
        logger.debug(
            f"Recorded completion ({event.category}, {event.priority}, {event.actual_minutes} min); "
            f"history size {len(self._history)}"
        )

    def estimate(
        self,
        title: str,
        description: str = "",
        category: TaskCategory = DEFAULT_CATEGORY,
        priority: TaskPriority = DEFAULT_PRIORITY,
        context: Optional[EstimationContext] = None,
    ) -> TaskEstimation:
        """Estimate task duration with the estimator ensemble.

        Args:
            title: Task title
            description: Task description
            category: Task category
            priority: Task priority
            context: Optional caller context (experience, workload, energy, now)

        Returns:
            TaskEstimation with fused minutes, confidence, breakdown,
            alternatives, subtasks and tips
        """
        category = TaskCategory(category)
        priority = TaskPriority(priority)
        now = self._clock() if self._clock else None
        features = extract_features(title, description, category, priority, context, now=now)

        history = self.history
        predictions: List[float] = []
        breakdown = features.as_dict()

        for name, estimator in self._estimators:
            try:
                value = float(estimator(features, history))
            except Exception as e:
                logger.warning(f"Estimator {name} failed for '{title[:50]}': {type(e).__name__}: {str(e)}")
                return self._fallback_estimation(features, category, priority)

            if not math.isfinite(value):
                logger.warning(f"Estimator {name} returned non-finite value {value} for '{title[:50]}'")
                return self._fallback_estimation(features, category, priority)

            predictions.append(value)
            breakdown[f"{name}_estimate"] = value

        fused = ensemble_prediction(predictions)
        confidence = calculate_confidence(predictions)
        breakdown["ensemble_estimate"] = fused

        logger.debug(
            f"Estimated '{title[:50]}': {fused:.1f} min (confidence {confidence:.2f}) "
            f"from {[round(p, 1) for p in predictions]}"
        )

        return TaskEstimation(
            estimated_minutes=clamp_duration(fused),
            confidence=confidence,
            complexity_score=features.complexity,
            factor_breakdown=breakdown,
            suggested_breakdown=generate_subtasks(fused),
            alternative_estimates=generate_alternatives(fused, confidence),
            tips=generate_tips(category, priority, fused),
            fallback=False,
        )

    def estimate_task(
        self, task: Task, context: Optional[EstimationContext] = None
    ) -> Tuple[Task, TaskEstimation]:
        """Estimate a task and return a copy carrying the new duration."""
        estimation = self.estimate(task.title, task.description, task.category, task.priority, context)
        updated = task.model_copy(update={"estimated_minutes": estimation.estimated_minutes})
        return updated, estimation

    def _fallback_estimation(
        self, features: FeatureVector, category: TaskCategory, priority: TaskPriority
    ) -> TaskEstimation:
        """Rule-based estimate alone at fixed confidence."""
        try:
            minutes = rule_based_estimate(features)
            if not math.isfinite(minutes):
                minutes = BASE_ESTIMATE_MINUTES
        except Exception as e:
            logger.error(f"Rule-based fallback failed: {type(e).__name__}: {str(e)}")
            minutes = BASE_ESTIMATE_MINUTES

        confidence = min(max(FALLBACK_CONFIDENCE, MIN_CONFIDENCE), MAX_CONFIDENCE)
        tips = [FALLBACK_TIP] + generate_tips(category, priority, minutes)[: MAX_TIPS - 1]

        return TaskEstimation(
            estimated_minutes=clamp_duration(minutes),
            confidence=confidence,
            complexity_score=min(max(features.complexity, 0.0), 1.0),
            factor_breakdown={"rule_based_estimate": minutes},
            suggested_breakdown=generate_subtasks(minutes),
            alternative_estimates=generate_alternatives(minutes, confidence),
            tips=tips,
            fallback=True,
        )

    def categorize(self, title: str, description: str = "") -> TaskCategorizationResult:
        """Suggest category, priority, tags and subtasks from the task text.

        Uses keyword matching only; the result is deterministic.
        """
        description = description or ""
        tokens = tokenize(f"{title} {description}")
        token_set = set(tokens)

        category, confidence = categorize_category(token_set)
        complexity = task_complexity(title, description)
        urgency = urgency_indicators(title, description)
        priority, reasoning = analyze_priority(urgency, complexity)

        tags: List[str] = []
        for token in tokens:
            if len(token) > 3 and f"#{token}" not in tags:
                tags.append(f"#{token}")
            if len(tags) == 3:
                break
        if complexity > 0.7:
            tags.append("#complex")
        elif complexity < 0.3:
            tags.append("#simple")
        if urgency > 0 and "#urgent" not in tags:
            tags.append("#urgent")

        logger.debug(f"Categorized '{title[:50]}' as {category.value} ({confidence:.2f}), priority {priority.value}")

        return TaskCategorizationResult(
            suggested_category=category,
            category_confidence=confidence,
            suggested_priority=priority,
            priority_reasoning=reasoning,
            smart_tags=tags,
            suggested_subtasks=CATEGORY_SUBTASKS.get(category, ["Plan", "Execute", "Review"]),
        )


def categorize_category(tokens: set) -> Tuple[TaskCategory, float]:
    """Pick the category whose keywords match the most tokens.

    Returns:
        Tuple of (category, confidence). GENERAL with confidence 0.5 when no
        keyword matches; ties resolve to the earlier category.
    """
    best_category = DEFAULT_CATEGORY
    best_hits = 0
    total_hits = 0

    for category, keywords in CATEGORY_KEYWORDS.items():
        hits = sum(1 for keyword in keywords if keyword in tokens)
        total_hits += hits
        if hits > best_hits:
            best_category = category
            best_hits = hits

    if best_hits == 0:
        return (DEFAULT_CATEGORY, 0.5)

    return (best_category, best_hits / total_hits)


def analyze_priority(urgency: float, complexity: float) -> Tuple[TaskPriority, str]:
    """Suggest a priority from the urgency and complexity features."""
    if urgency >= 0.4 or complexity > 0.8:
        return (TaskPriority.CRITICAL, "High urgency or complexity detected")
    if urgency > 0.1 or complexity > 0.6:
        return (TaskPriority.HIGH, "Moderate urgency or complexity")
    if complexity > 0.4:
        return (TaskPriority.MEDIUM, "Standard priority task")
    return (TaskPriority.LOW, "Low complexity task")


def generate_subtasks(minutes: float) -> List[TaskSubtask]:
    """Split long tasks into roughly half-hour phases."""
    if minutes <= SUBTASK_THRESHOLD_MINUTES:
        return []

    count = math.ceil(minutes / SUBTASK_PHASE_MINUTES)
    phase_minutes = round(minutes / count)
    return [
        TaskSubtask(
            id=f"subtask_{i + 1}",
            title=f"Phase {i + 1}",
            description=f"Auto-generated subtask {i + 1}",
            estimated_minutes=phase_minutes,
        )
        for i in range(count)
    ]


def generate_tips(category: TaskCategory, priority: TaskPriority, minutes: float) -> List[str]:
    """Up to three contextual productivity tips, task-specific ones first."""
    tips: List[str] = []

    if priority == TaskPriority.CRITICAL:
        tips.append("This is a critical task - schedule it during your peak hours")

    if minutes > LONG_TASK_MINUTES:
        tips.append("Consider breaking this task into smaller parts")

    tips.extend(CATEGORY_TIPS.get(category, ["Stay focused and take breaks as needed"]))
    return tips[:MAX_TIPS]
