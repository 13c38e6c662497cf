"""Dispatcher fanning a scan result out to notification channels."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Self

from ...domain.entities import ScanResult
from ..ports import NotificationChannel, NullTracer, Tracer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ChannelOutcome:
    """Result of one delivery attempt on one channel."""

    channel: str
    success: bool
    error: str | None = None


@dataclass(frozen=True, slots=True)
class DispatchReport:
    """Per-channel outcomes of a dispatch, in delivery order."""

    outcomes: tuple[ChannelOutcome, ...] = ()

    @property
    def attempted(self) -> int:
        """Number of delivery attempts."""
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        """Number of successful deliveries."""
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        """Number of failed deliveries."""
        return self.attempted - self.succeeded

    @property
    def all_failed(self) -> bool:
        """True if deliveries were attempted and none succeeded."""
        return self.attempted > 0 and self.succeeded == 0

    @property
    def failed_channels(self) -> list[str]:
        """Names of channels with a failed delivery."""
        return [o.channel for o in self.outcomes if not o.success]

    @classmethod
    def merge(cls, reports: Iterable[DispatchReport]) -> Self:
        """Concatenate the outcomes of several dispatches."""
        return cls(outcomes=tuple(o for r in reports for o in r.outcomes))


class NotificationDispatcher:
    """
    Application service delivering a scan result to every enabled channel.

    Channels are called one after another in the given order. A failing
    channel is logged and recorded; the remaining channels are still called.
    """

    def __init__(self, *, tracer: Tracer | None = None) -> None:
        """Initialize the dispatcher."""
        self._tracer = tracer or NullTracer()

    async def dispatch(
        self,
        result: ScanResult,
        channels: Sequence[NotificationChannel],
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> DispatchReport:
        """
        Send the result through all enabled channels.

        Args:
            result: The scan result to deliver.
            channels: Candidate channels; disabled ones are skipped.
            cancel_event: Optional event; when set, dispatch stops with
                asyncio.CancelledError before the next channel.

        Returns:
            DispatchReport with one outcome per enabled channel.
        """
        enabled = [c for c in channels if c.is_enabled()]

        if not enabled:
            logger.warning("No notification channels are enabled. Skipping notification dispatch.")
            return DispatchReport()

        outcomes: list[ChannelOutcome] = []

        with self._tracer.start_span("dispatch_notifications") as span:
            span.set_attribute("channels.enabled", len(enabled))

            for channel in enabled:
                if cancel_event is not None and cancel_event.is_set():
                    raise asyncio.CancelledError

                try:
                    logger.info("Sending notification via %s", channel.name)
                    await channel.send(result)
                    logger.info("Notification sent successfully via %s", channel.name)
                    outcomes.append(ChannelOutcome(channel=channel.name, success=True))
                except Exception as e:
                    logger.exception("Failed to send notification via %s", channel.name)
                    outcomes.append(
                        ChannelOutcome(channel=channel.name, success=False, error=str(e))
                    )

            report = DispatchReport(outcomes=tuple(outcomes))
            span.set_attribute("channels.failed", report.failed)

        return report
