"""Duration normalization for focusflow tasks.

Every estimate that becomes a task duration passes through here, so tasks
always carry a whole number of minutes inside the allowed range.
"""

from focusflow.models.constants import MIN_DURATION_MIN, MAX_DURATION_MIN


def clamp_duration(minutes: float) -> int:
    """Round and clamp a duration into the allowed task range.

    Args:
        minutes: Duration in minutes (may be fractional or out of range)

    Returns:
        Integer minutes in [MIN_DURATION_MIN, MAX_DURATION_MIN]
    """
    return int(min(max(round(minutes), MIN_DURATION_MIN), MAX_DURATION_MIN))
