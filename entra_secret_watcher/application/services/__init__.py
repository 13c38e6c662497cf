"""Application services - Scanning and notification dispatch."""

from .credential_scanner import CredentialScanner
from .notification_dispatcher import ChannelOutcome, DispatchReport, NotificationDispatcher

__all__ = [
    "ChannelOutcome",
    "CredentialScanner",
    "DispatchReport",
    "NotificationDispatcher",
]
