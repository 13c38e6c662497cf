"""Credential status value object."""

from enum import StrEnum


class CredentialStatus(StrEnum):
    """Status of a credential based on its remaining lifetime."""

    EXPIRED = "Expired"
    EXPIRING_SOON = "ExpiringSoon"
    VALID = "Valid"

    def __str__(self) -> str:
        return self.value
