"""Tests for the credential lifetime classifier."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from entra_secret_watcher.domain.services import classify, days_between
from entra_secret_watcher.domain.value_objects import CredentialStatus


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize("days_left", [-1, -2, -30, -365])
    def test_negative_days_are_expired(self, days_left: int) -> None:
        """Negative days left should classify as EXPIRED with the absolute value in the label."""
        classification = classify(days_left)
        assert classification.status == CredentialStatus.EXPIRED
        assert classification.label == f"EXPIRED since {abs(days_left)} day(s)"

    @pytest.mark.parametrize("days_left", [0, 1, 15, 30])
    def test_zero_to_thirty_days_are_expiring_soon(self, days_left: int) -> None:
        """0..30 days left should classify as EXPIRING_SOON."""
        classification = classify(days_left)
        assert classification.status == CredentialStatus.EXPIRING_SOON
        assert classification.label == f"Expires in {days_left} day(s)"

    def test_zero_days_is_not_expired(self) -> None:
        """Same-day expiration is still expiring, not expired."""
        assert classify(0).status == CredentialStatus.EXPIRING_SOON

    @pytest.mark.parametrize("days_left", [31, 90, 400])
    def test_more_than_thirty_days_is_valid(self, days_left: int) -> None:
        """More than 30 days left should classify as VALID."""
        classification = classify(days_left)
        assert classification.status == CredentialStatus.VALID
        assert classification.label == "Valid"

    def test_classification_is_repeatable(self) -> None:
        """Classifying the same value twice should give equal results."""
        assert classify(-3) == classify(-3)
        assert classify(12) == classify(12)


class TestDaysBetween:
    """Tests for days_between()."""

    NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)

    def test_whole_days(self) -> None:
        """Exact day offsets should map to the same number of days."""
        assert days_between(self.NOW, self.NOW + timedelta(days=15)) == 15
        assert days_between(self.NOW, self.NOW - timedelta(days=2)) == -2

    def test_partial_day_is_floored(self) -> None:
        """Partial days should be floored."""
        assert days_between(self.NOW, self.NOW + timedelta(days=1, seconds=-1)) == 0
        assert days_between(self.NOW, self.NOW + timedelta(hours=36)) == 1

    def test_just_expired_is_negative(self) -> None:
        """A credential that expired a second ago has -1 days left."""
        assert days_between(self.NOW, self.NOW - timedelta(seconds=1)) == -1

    def test_naive_datetimes_are_treated_as_utc(self) -> None:
        """Naive expiry dates should be assumed UTC."""
        naive_expiry = datetime(2026, 1, 25, 12, 0)  # noqa: DTZ001
        assert days_between(self.NOW, naive_expiry) == 10
