"""Port for tracing - side-channel observability."""

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Any, Protocol


class Span(Protocol):
    """A unit of traced work."""

    def set_attribute(self, key: str, value: Any) -> None:
        """Attach an attribute to the span."""
        ...


class Tracer(Protocol):
    """Port for starting spans around scan and dispatch work."""

    def start_span(self, name: str) -> AbstractContextManager[Span]:
        """Start a span that ends when the context exits."""
        ...


class _NullSpan:
    def set_attribute(self, key: str, value: Any) -> None:
        pass


class NullTracer:
    """Tracer that records nothing."""

    @contextmanager
    def start_span(self, name: str) -> Iterator[Span]:  # noqa: ARG002
        yield _NullSpan()
