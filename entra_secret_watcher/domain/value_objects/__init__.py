"""Domain value objects - Immutable objects defined by their attributes."""

from .credential_status import CredentialStatus
from .credential_type import CredentialType
from .tenant import TenantContext
from .threshold import ScanThreshold

__all__ = [
    "CredentialStatus",
    "CredentialType",
    "ScanThreshold",
    "TenantContext",
]
