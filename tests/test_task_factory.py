"""Tests for duration clamping."""

import pytest

from focusflow.models.task_factory import clamp_duration


class TestClampDuration:
    """Test clamp_duration()."""

    @pytest.mark.parametrize("minutes, expected", [
        (0, 5),
        (4.4, 5),
        (37.6, 38),
        (240, 240),
        (999, 240),
    ])
    def test_clamp(self, minutes, expected):
        """Durations should be rounded and kept within 5-240 minutes."""
        assert clamp_duration(minutes) == expected

    def test_returns_int(self):
        """Fractional estimates should come back as whole minutes."""
        assert isinstance(clamp_duration(42.3), int)
