"""Tests for services/backoff.py — exponential delay with cap."""

import pytest

from services.backoff import backoff_delay


class TestBackoffDelay:
    @pytest.mark.parametrize(("attempt", "expected"), [(0, 1.0), (1, 2.0), (2, 4.0), (3, 8.0), (5, 32.0)])
    def test_doubles_per_attempt(self, attempt: int, expected: float) -> None:
        assert backoff_delay(attempt) == expected

    def test_capped(self) -> None:
        assert backoff_delay(6) == 60.0
        assert backoff_delay(20) == 60.0
        assert backoff_delay(10, cap=5.0) == 5.0

    def test_base_scales(self) -> None:
        assert backoff_delay(2, base=0.5) == 2.0

    def test_negative_attempt_treated_as_zero(self) -> None:
        assert backoff_delay(-3) == 1.0
