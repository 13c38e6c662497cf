"""Domain entities - Objects with identity and lifecycle."""

from .credential import CredentialRecord, ExpiringCredential
from .scan_result import ScanResult

__all__ = [
    "CredentialRecord",
    "ExpiringCredential",
    "ScanResult",
]
