"""Microsoft Teams notification channel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from .base import DATE_FORMAT, SCAN_TIME_FORMAT, BaseNotificationChannel

if TYPE_CHECKING:
    from ....domain.entities import ExpiringCredential, ScanResult


@dataclass(frozen=True, slots=True)
class TeamsConfig:
    """Teams notification configuration."""

    enabled: bool = False
    webhook_url: str = ""


def build_adaptive_card(result: ScanResult) -> dict[str, Any]:
    """Build an Adaptive Card message for Teams."""
    body: list[dict[str, Any]] = [
        {
            "type": "TextBlock",
            "text": "🔐 Entra ID Credential Report",
            "weight": "Bolder",
            "size": "Large",
        },
        {
            "type": "FactSet",
            "facts": [
                {"title": "Tenant", "value": result.tenant_name},
                {"title": "Scanned", "value": f"{result.scanned_at:{SCAN_TIME_FORMAT}} UTC"},
                {"title": "Apps scanned", "value": str(result.total_applications_scanned)},
                {"title": "Expiring", "value": f"{result.expiring_soon_count} ⚠️"},
                {"title": "Expired", "value": f"{result.expired_count} 🔴"},
            ],
        },
    ]
    body.extend(_credential_block(cred) for cred in result.credentials)

    return {
        "type": "message",
        "attachments": [
            {
                "contentType": "application/vnd.microsoft.card.adaptive",
                "contentUrl": None,
                "content": {
                    "$schema": "http://adaptivecards.io/schemas/adaptive-card.json",
                    "type": "AdaptiveCard",
                    "version": "1.4",
                    "msteams": {"width": "Full"},
                    "body": body,
                },
            }
        ],
    }


def _credential_block(cred: ExpiringCredential) -> dict[str, Any]:
    color = "Attention" if cred.is_expired else "Warning"
    return {
        "type": "Container",
        "separator": True,
        "items": [
            {
                "type": "TextBlock",
                "text": f"{cred.alert_icon} **{cred.application_name}**",
                "color": color,
                "wrap": True,
            },
            {
                "type": "FactSet",
                "facts": [
                    {"title": "Type", "value": str(cred.credential_type)},
                    {"title": "Name", "value": cred.display_name},
                    {"title": "Expires", "value": f"{cred.expires_on:{DATE_FORMAT}}"},
                    {"title": "Status", "value": cred.status_label},
                ],
            },
            {
                "type": "ActionSet",
                "actions": [
                    {
                        "type": "Action.OpenUrl",
                        "title": "Manage in Azure Portal",
                        "url": cred.azure_portal_url,
                    }
                ],
            },
        ],
    }


class TeamsNotificationChannel(BaseNotificationChannel):
    """Send notifications to Microsoft Teams via incoming webhook."""

    NAME = "Teams (Webhook)"

    def __init__(
        self,
        config: TeamsConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Teams channel."""
        super().__init__(transport=transport)
        self._config = config

    def is_enabled(self) -> bool:
        """Check if Teams is enabled."""
        return self._config.enabled

    async def _deliver(self, result: ScanResult) -> None:
        """Post the Adaptive Card to the webhook."""
        await self._post_json(self._config.webhook_url, build_adaptive_card(result))
        self._logger.debug("Teams webhook notification sent")
