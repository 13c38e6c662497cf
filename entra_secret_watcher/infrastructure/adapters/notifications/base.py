"""Base notification channel with common functionality."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

import httpx

from ....application.exceptions import ChannelDeliveryError

if TYPE_CHECKING:
    from ....domain.entities import ScanResult

SCAN_TIME_FORMAT = "%Y-%m-%d %H:%M"
DATE_FORMAT = "%Y-%m-%d"


class BaseNotificationChannel(ABC):
    """Abstract base class for notification channels."""

    NAME: ClassVar[str]

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize the notification channel."""
        self._logger = logging.getLogger(self.__class__.__name__)
        self._transport = transport

    @property
    def name(self) -> str:
        """Display name used for log attribution."""
        return self.NAME

    @abstractmethod
    def is_enabled(self) -> bool:
        """Check if the channel is enabled."""
        ...

    async def send(self, result: ScanResult) -> None:
        """Deliver the result, raising ChannelDeliveryError on failure."""
        try:
            await self._deliver(result)
        except httpx.HTTPStatusError as e:
            reason = f"HTTP {e.response.status_code} from {e.request.url.host}"
            raise ChannelDeliveryError(self.name, reason) from e
        except (httpx.HTTPError, RuntimeError) as e:
            raise ChannelDeliveryError(self.name, str(e) or e.__class__.__name__) from e

    @abstractmethod
    async def _deliver(self, result: ScanResult) -> None:
        """Render and transmit the channel-native payload."""
        ...

    async def _post_json(self, url: str, payload: dict[str, Any]) -> None:
        """POST a JSON payload and fail on non-success status."""
        async with httpx.AsyncClient(timeout=30.0, transport=self._transport) as client:
            response = await client.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
