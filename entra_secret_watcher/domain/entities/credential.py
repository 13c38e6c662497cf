"""Credential entities for secrets and certificates."""

from dataclasses import dataclass
from datetime import datetime
from typing import Self

from ..services.classifier import Classification, classify
from ..value_objects import CredentialStatus, CredentialType


@dataclass(frozen=True, slots=True)
class CredentialRecord:
    """A credential as found during directory traversal, before classification."""

    application_name: str
    application_id: str
    credential_type: CredentialType
    display_name: str
    expires_on: datetime


@dataclass(frozen=True, slots=True)
class ExpiringCredential:
    """A credential within the scan window, with its remaining lifetime."""

    application_name: str
    application_id: str
    credential_type: CredentialType
    display_name: str
    expires_on: datetime
    days_left: int

    @property
    def classification(self) -> Classification:
        """Status and label derived from days left."""
        return classify(self.days_left)

    @property
    def status(self) -> CredentialStatus:
        """Expiration status of this credential."""
        return self.classification.status

    @property
    def status_label(self) -> str:
        """Human-readable status, e.g. ``Expires in 3 day(s)``."""
        return self.classification.label

    @property
    def is_expired(self) -> bool:
        """Check if credential has expired."""
        return self.status == CredentialStatus.EXPIRED

    @property
    def alert_icon(self) -> str:
        """Red for expired credentials, orange for anything still to expire."""
        return "🔴" if self.is_expired else "🟠"

    @property
    def azure_portal_url(self) -> str:
        """URL to manage this app's credentials in Azure Portal."""
        return (
            f"https://portal.azure.com/#view/Microsoft_AAD_RegisteredApps"
            f"/ApplicationMenuBlade/~/Credentials/appId/{self.application_id}"
        )

    @classmethod
    def from_record(cls, record: CredentialRecord, days_left: int) -> Self:
        """Build from a traversal record and its computed days left."""
        return cls(
            application_name=record.application_name,
            application_id=record.application_id,
            credential_type=record.credential_type,
            display_name=record.display_name,
            expires_on=record.expires_on,
            days_left=days_left,
        )
