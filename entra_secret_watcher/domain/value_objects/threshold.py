"""Scan threshold value object."""

from dataclasses import dataclass

from ..exceptions import InvalidThresholdError

MIN_THRESHOLD_DAYS = 1
MAX_THRESHOLD_DAYS = 365


@dataclass(frozen=True, slots=True)
class ScanThreshold:
    """Maximum days left for a credential to be included in a scan result."""

    days: int = 30

    def __post_init__(self) -> None:
        """Validate the threshold range."""
        if not (MIN_THRESHOLD_DAYS <= self.days <= MAX_THRESHOLD_DAYS):
            msg = (
                f"Threshold must be between {MIN_THRESHOLD_DAYS} and "
                f"{MAX_THRESHOLD_DAYS} days, got {self.days}"
            )
            raise InvalidThresholdError(msg)

    def includes(self, days_left: int) -> bool:
        """Check if a credential with the given days left falls in the window."""
        return days_left <= self.days
