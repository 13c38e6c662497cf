"""OpenTelemetry tracer adapter."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from opentelemetry import trace

from ...application.ports import Span


class OpenTelemetryTracer:
    """
    Tracer implementation backed by the OpenTelemetry API.

    Spans go to whatever tracer provider the process has configured; with
    none configured the API's no-op provider is used.
    """

    def __init__(self, instrumentation_name: str = "entra_secret_watcher") -> None:
        """Initialize the tracer."""
        self._tracer = trace.get_tracer(instrumentation_name)

    @contextmanager
    def start_span(self, name: str) -> Iterator[Span]:
        """Start a span as the current span."""
        with self._tracer.start_as_current_span(name) as span:
            yield span
