"""Application ports - Interfaces for external adapters."""

from .directory_client import (
    ApplicationPage,
    ApplicationRecord,
    CredentialItem,
    DirectoryClient,
)
from .notification_channel import NotificationChannel
from .tracer import NullTracer, Span, Tracer

__all__ = [
    "ApplicationPage",
    "ApplicationRecord",
    "CredentialItem",
    "DirectoryClient",
    "NotificationChannel",
    "NullTracer",
    "Span",
    "Tracer",
]
