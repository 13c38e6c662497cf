"""Scan result aggregate root."""

from dataclasses import dataclass, replace
from datetime import datetime

from ..value_objects import CredentialStatus
from .credential import ExpiringCredential


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Aggregate root holding one scan's expiring credentials, most urgent first."""

    tenant_name: str
    tenant_id: str
    scanned_at: datetime
    credentials: tuple[ExpiringCredential, ...]
    total_applications_scanned: int = 0

    @property
    def has_expiring(self) -> bool:
        """Check if any credential is within the scan window."""
        return bool(self.credentials)

    @property
    def expired_count(self) -> int:
        """Count of expired credentials."""
        return self._count(CredentialStatus.EXPIRED)

    @property
    def expiring_soon_count(self) -> int:
        """Count of credentials expiring soon."""
        return self._count(CredentialStatus.EXPIRING_SOON)

    @property
    def total_count(self) -> int:
        """Total number of included credentials."""
        return len(self.credentials)

    @property
    def affected_applications_count(self) -> int:
        """Count of unique applications with included credentials."""
        return len({c.application_id for c in self.credentials})

    def get_summary(self) -> str:
        """Generate a human-readable summary of the result."""
        if not self.credentials:
            return "No credentials expiring"

        parts: list[str] = []
        if self.expired_count:
            parts.append(f"{self.expired_count} expired")
        if self.expiring_soon_count:
            parts.append(f"{self.expiring_soon_count} expiring soon")
        valid = self.total_count - self.expired_count - self.expiring_soon_count
        if valid:
            parts.append(f"{valid} within threshold")

        return f"{self.total_count} credential(s) requiring attention: {', '.join(parts)}"

    def split(self) -> list["ScanResult"]:
        """One single-credential result per credential, in order."""
        return [replace(self, credentials=(credential,)) for credential in self.credentials]

    def _count(self, status: CredentialStatus) -> int:
        return sum(1 for c in self.credentials if c.status == status)
