"""Notification channel adapter implementations."""

from .base import BaseNotificationChannel
from .gotify import GotifyConfig, GotifyNotificationChannel
from .graph_email import GraphEmailConfig, GraphEmailNotificationChannel
from .teams import TeamsConfig, TeamsNotificationChannel

__all__ = [
    "BaseNotificationChannel",
    "GotifyConfig",
    "GotifyNotificationChannel",
    "GraphEmailConfig",
    "GraphEmailNotificationChannel",
    "TeamsConfig",
    "TeamsNotificationChannel",
]
