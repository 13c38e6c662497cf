"""Email notification channel using Microsoft Graph API."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import TYPE_CHECKING, Any

from .base import DATE_FORMAT, SCAN_TIME_FORMAT, BaseNotificationChannel

if TYPE_CHECKING:
    from ....domain.entities import ScanResult
    from ..entra_id import GraphClient


@dataclass(frozen=True, slots=True)
class GraphEmailConfig:
    """Microsoft Graph email notification configuration."""

    enabled: bool = False
    from_address: str = ""  # Sender mailbox (app needs Mail.Send permission)
    to_addresses: str = ""  # Comma-separated recipients
    save_to_sent_items: bool = False

    @property
    def recipients(self) -> list[str]:
        """Recipient addresses, trimmed, empty entries dropped."""
        return [addr.strip() for addr in self.to_addresses.split(",") if addr.strip()]


_CELL = "padding: 8px; border: 1px solid #ddd;"


def build_subject(result: ScanResult) -> str:
    """Format email subject line."""
    return (
        f"🔐 Entra ID Credential Report — {result.tenant_name} "
        f"({result.total_count} expiring)"
    )


def build_html(result: ScanResult) -> str:
    """Render the scan result as an HTML document."""
    rows = ""
    for cred in result.credentials:
        expired = cred.is_expired
        row_color = "#fdecea" if expired else "#fff8e1"
        status_color = "#e74c3c" if expired else "#f39c12"
        rows += f'<tr style="background: {row_color};">'
        rows += (
            f'<td style="{_CELL}"><a href="{escape(cred.azure_portal_url)}">'
            f"{escape(cred.application_name)}</a></td>"
        )
        rows += f'<td style="{_CELL}">{cred.credential_type}</td>'
        rows += f'<td style="{_CELL}">{escape(cred.display_name)}</td>'
        rows += (
            f'<td style="{_CELL} color: {status_color}; font-weight: bold;">'
            f"{cred.status_label}</td>"
        )
        rows += f'<td style="{_CELL}">{cred.expires_on:{DATE_FORMAT}}</td></tr>\n'

    alert = ""
    if result.expired_count:
        alert = (
            '<div style="background: #fdecea; border-left: 4px solid #e74c3c; '
            'padding: 10px; margin: 10px 0;">'
            f"⚠️ <strong>{result.expired_count}</strong> credential(s) already expired!</div>"
        )

    return f"""<!DOCTYPE html>
<html>
<body>
<div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; max-width: 700px; margin: 0 auto;">
<h2 style="color: #1a1a1a; border-bottom: 2px solid #e74c3c; padding-bottom: 8px;">🔐 Entra ID Credential Report</h2>
<p style="color: #555;">
<strong>Tenant:</strong> {escape(result.tenant_name)}<br/>
<strong>Scanned:</strong> {result.scanned_at:{SCAN_TIME_FORMAT}} UTC<br/>
<strong>Applications scanned:</strong> {result.total_applications_scanned}
</p>
{alert}
<table style="width: 100%; border-collapse: collapse; margin-top: 15px;">
<thead>
<tr style="background: #f5f5f5;">
<th style="{_CELL} text-align: left;">Application</th>
<th style="{_CELL} text-align: left;">Type</th>
<th style="{_CELL} text-align: left;">Name</th>
<th style="{_CELL} text-align: left;">Status</th>
<th style="{_CELL} text-align: left;">Expires</th>
</tr>
</thead>
<tbody>
{rows}</tbody>
</table>
<p style="color: #999; font-size: 12px; margin-top: 20px;">Generated by <strong>entra-secret-watcher</strong></p>
</div>
</body>
</html>"""


class GraphEmailNotificationChannel(BaseNotificationChannel):
    """Send notifications via Microsoft Graph API email."""

    NAME = "Email (Graph API)"

    def __init__(self, config: GraphEmailConfig, client: GraphClient) -> None:
        """Initialize the Graph email channel."""
        super().__init__()
        self._config = config
        self._client = client

    def is_enabled(self) -> bool:
        """Check if Graph email is enabled."""
        return self._config.enabled

    async def _deliver(self, result: ScanResult) -> None:
        """Send the HTML report through Graph ``sendMail``."""
        await self._client.send_mail(self._config.from_address, self._build_message(result))
        self._logger.debug("Email notification sent to %s", self._config.to_addresses)

    def _build_message(self, result: ScanResult) -> dict[str, Any]:
        """Build the Graph API email message payload."""
        return {
            "message": {
                "subject": build_subject(result),
                "body": {
                    "contentType": "HTML",
                    "content": build_html(result),
                },
                "toRecipients": [
                    {"emailAddress": {"address": addr}} for addr in self._config.recipients
                ],
            },
            "saveToSentItems": self._config.save_to_sent_items,
        }
