"""Credential type value object."""

from enum import StrEnum


class CredentialType(StrEnum):
    """Kind of credential attached to an Entra ID application."""

    SECRET = "Secret"
    CERTIFICATE = "Certificate"

    def __str__(self) -> str:
        return self.value
