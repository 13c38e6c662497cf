"""Classification of credential lifetimes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime

from ..value_objects import CredentialStatus

# Label boundary between "expiring soon" and "valid". Independent of the
# configurable scan threshold.
EXPIRING_SOON_DAYS = 30

_SECONDS_PER_DAY = 86400


@dataclass(frozen=True, slots=True)
class Classification:
    """Status and human-readable label for a number of days left."""

    status: CredentialStatus
    label: str


def classify(days_left: int) -> Classification:
    """
    Classify a credential's remaining lifetime.

    Zero days left is still "expiring soon"; a credential only counts as
    expired once the remaining days go negative.

    Args:
        days_left: Whole days until expiration (negative if already expired).

    Returns:
        Classification with status and display label.
    """
    if days_left < 0:
        return Classification(
            CredentialStatus.EXPIRED,
            f"EXPIRED since {abs(days_left)} day(s)",
        )
    if days_left <= EXPIRING_SOON_DAYS:
        return Classification(
            CredentialStatus.EXPIRING_SOON,
            f"Expires in {days_left} day(s)",
        )
    return Classification(CredentialStatus.VALID, "Valid")


def days_between(now: datetime, expires_on: datetime) -> int:
    """Whole-day floor of ``expires_on - now``. Naive datetimes are taken as UTC."""
    now = now if now.tzinfo else now.replace(tzinfo=UTC)
    expires_on = expires_on if expires_on.tzinfo else expires_on.replace(tzinfo=UTC)
    return math.floor((expires_on - now).total_seconds() / _SECONDS_PER_DAY)
