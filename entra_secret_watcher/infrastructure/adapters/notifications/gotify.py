"""Gotify push notification channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from .base import DATE_FORMAT, SCAN_TIME_FORMAT, BaseNotificationChannel

if TYPE_CHECKING:
    from ....domain.entities import ScanResult


@dataclass(frozen=True, slots=True)
class GotifyConfig:
    """Gotify notification configuration."""

    enabled: bool = False
    url: str = ""
    token: str = ""


def compute_priority(result: ScanResult) -> int:
    """Gotify priority: 9 with expired credentials, 6 with expiring ones, else 3."""
    if result.expired_count:
        return 9
    if result.expiring_soon_count:
        return 6
    return 3


def build_plain_text(result: ScanResult) -> str:
    """Render the scan result as a plain-text block."""
    lines = [
        f"🔐 Entra ID Credential Report — {result.tenant_name}",
        f"Scanned at: {result.scanned_at:{SCAN_TIME_FORMAT}} UTC",
        f"Applications scanned: {result.total_applications_scanned}",
        f"Credentials expiring: {result.total_count} "
        f"(Expired: {result.expired_count}, Expiring soon: {result.expiring_soon_count})",
        "─" * 50,
    ]

    for cred in result.credentials:
        lines.extend(
            [
                f"{cred.alert_icon} {cred.application_name}",
                f"   Type: {cred.credential_type} | Name: {cred.display_name}",
                f"   {cred.status_label} (Expires: {cred.expires_on:{DATE_FORMAT}})",
                f"   AppId: {cred.application_id}",
                "",
            ]
        )

    return "\n".join(lines) + "\n"


class GotifyNotificationChannel(BaseNotificationChannel):
    """Send notifications to a Gotify server."""

    NAME = "Gotify"

    def __init__(
        self,
        config: GotifyConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Gotify channel."""
        super().__init__(transport=transport)
        self._config = config

    def is_enabled(self) -> bool:
        """Check if Gotify is enabled."""
        return self._config.enabled

    async def _deliver(self, result: ScanResult) -> None:
        """Post the plain-text report as a Gotify message."""
        priority = compute_priority(result)
        payload = {
            "title": f"🔐 Entra ID — {result.tenant_name}: "
            f"{result.total_count} credential(s) expiring",
            "message": build_plain_text(result),
            "priority": priority,
        }

        url = f"{self._config.url.rstrip('/')}/message?token={self._config.token}"
        await self._post_json(url, payload)

        self._logger.debug("Gotify notification sent with priority %d", priority)
