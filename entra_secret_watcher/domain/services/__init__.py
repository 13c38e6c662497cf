"""Domain services - Stateless operations on domain objects."""

from .classifier import EXPIRING_SOON_DAYS, Classification, classify, days_between

__all__ = [
    "EXPIRING_SOON_DAYS",
    "Classification",
    "classify",
    "days_between",
]
