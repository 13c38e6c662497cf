"""Port for notification channels - driven/secondary port."""

from typing import Protocol

from ...domain.entities import ScanResult


class NotificationChannel(Protocol):
    """
    Port for delivering a scan result to an outbound transport.

    This is a driven (secondary) port. The dispatcher only relies on this
    contract and never on the concrete transport.
    """

    @property
    def name(self) -> str:
        """Display name used for log attribution."""
        ...

    def is_enabled(self) -> bool:
        """
        Check if this channel should receive notifications.

        Returns:
            True if the channel is enabled.
        """
        ...

    async def send(self, result: ScanResult) -> None:
        """
        Deliver the scan result.

        Args:
            result: The scan result to notify about.

        Raises:
            ChannelDeliveryError: If delivery fails.
        """
        ...
