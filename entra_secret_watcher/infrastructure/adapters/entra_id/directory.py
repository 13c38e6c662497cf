"""Entra ID directory client implementation."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from ....application.ports import ApplicationPage, ApplicationRecord, CredentialItem
from .graph_client import GraphClient

logger = logging.getLogger(__name__)


class EntraIdDirectoryClient:
    """
    Directory client implementation using Microsoft Graph API.

    Implements the DirectoryClient port for Entra ID app registrations.
    The page token is the ``@odata.nextLink`` returned by Graph.
    """

    def __init__(self, client: GraphClient) -> None:
        """
        Initialize the directory client.

        Args:
            client: Authenticated Graph API client.
        """
        self._client = client

    async def list_applications(self, page_token: str | None = None) -> ApplicationPage:
        """Retrieve one page of application registrations."""
        url = page_token or self._client.first_applications_url()
        items, next_link = await self._client.get_page(url)

        logger.debug("Fetched %d application registrations", len(items))

        return ApplicationPage(
            applications=tuple(self._map_application(item) for item in items),
            next_page_token=next_link,
        )

    def _map_application(self, raw: dict[str, Any]) -> ApplicationRecord:
        """Map raw Graph API application data to a port record."""
        return ApplicationRecord(
            display_name=raw.get("displayName"),
            app_id=raw.get("appId"),
            password_credentials=tuple(
                self._map_credential(c) for c in raw.get("passwordCredentials") or []
            ),
            key_credentials=tuple(
                self._map_credential(c) for c in raw.get("keyCredentials") or []
            ),
        )

    def _map_credential(self, raw: dict[str, Any]) -> CredentialItem:
        """Map raw Graph API credential data to a port record."""
        expiry_str = raw.get("endDateTime")
        return CredentialItem(
            display_name=raw.get("displayName"),
            expires_on=self._parse_datetime(expiry_str) if expiry_str else None,
        )

    @staticmethod
    def _parse_datetime(dt_string: str) -> datetime | None:
        """Parse ISO datetime string to datetime object."""
        try:
            # Handle various formats from Graph API
            dt_string = dt_string.replace("Z", "+00:00")
            dt = datetime.fromisoformat(dt_string)
            # Ensure timezone-aware
            return dt if dt.tzinfo else dt.replace(tzinfo=UTC)
        except ValueError:
            logger.warning("Failed to parse datetime: %s", dt_string)
            return None
