"""Infrastructure adapters - Implementations of application ports."""

from .entra_id import EntraIdDirectoryClient, GraphClient, GraphClientConfig
from .notifications import (
    GotifyNotificationChannel,
    GraphEmailNotificationChannel,
    TeamsNotificationChannel,
)
from .tracing import OpenTelemetryTracer

__all__ = [
    "EntraIdDirectoryClient",
    "GotifyNotificationChannel",
    "GraphClient",
    "GraphClientConfig",
    "GraphEmailNotificationChannel",
    "OpenTelemetryTracer",
    "TeamsNotificationChannel",
]
