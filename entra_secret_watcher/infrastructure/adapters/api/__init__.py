"""API adapter for HTTP endpoints."""

from .app import RunCoordinator, create_app
from .models import DispatchSummary, HealthResponse, RunResponse, ScanSummary

__all__ = [
    "DispatchSummary",
    "HealthResponse",
    "RunCoordinator",
    "RunResponse",
    "ScanSummary",
    "create_app",
]
