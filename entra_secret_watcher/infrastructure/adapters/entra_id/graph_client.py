"""Microsoft Graph API client for Entra ID."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

import httpx
import msal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GraphClientConfig:
    """Configuration for Microsoft Graph API client."""

    tenant_id: str
    client_id: str
    client_secret: str
    timeout: float = 30.0


class GraphClient:
    """
    Async client for Microsoft Graph API.

    Handles authentication and single-page requests to the Graph API.
    The same client (and cached token) serves directory reads and mail.
    """

    GRAPH_BASE_URL: ClassVar[str] = "https://graph.microsoft.com/v1.0"
    AUTHORITY_BASE: ClassVar[str] = "https://login.microsoftonline.com"
    SCOPE: ClassVar[list[str]] = ["https://graph.microsoft.com/.default"]
    APPLICATION_FIELDS: ClassVar[tuple[str, ...]] = (
        "displayName",
        "appId",
        "passwordCredentials",
        "keyCredentials",
    )
    PAGE_SIZE: ClassVar[int] = 999

    def __init__(
        self,
        config: GraphClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Graph client."""
        self._config = config
        self._transport = transport
        self._access_token: str | None = None
        self._token_expiry: datetime | None = None
        self._msal_app: msal.ConfidentialClientApplication | None = None

    def _get_msal_app(self) -> msal.ConfidentialClientApplication:
        """Get or create MSAL application instance."""
        if self._msal_app is None:
            authority = f"{self.AUTHORITY_BASE}/{self._config.tenant_id}"
            self._msal_app = msal.ConfidentialClientApplication(
                client_id=self._config.client_id,
                client_credential=self._config.client_secret,
                authority=authority,
            )
        return self._msal_app

    async def _acquire_token(self) -> str:
        """Acquire access token using client credentials flow."""
        # Check if existing token is still valid
        if self._access_token and self._token_expiry and datetime.now(UTC) < self._token_expiry:
            return self._access_token

        app = self._get_msal_app()
        # msal is synchronous
        result = await asyncio.to_thread(app.acquire_token_for_client, scopes=self.SCOPE)

        if "access_token" not in result:
            error = result.get("error_description", result.get("error", "Unknown error"))
            msg = f"Failed to acquire access token: {error}"
            raise RuntimeError(msg)

        self._access_token = result["access_token"]
        expires_in = result.get("expires_in", 3600)
        # Refresh 5 minutes before expiry
        self._token_expiry = datetime.now(UTC) + timedelta(seconds=expires_in - 300)

        return self._access_token

    async def _headers(self) -> dict[str, str]:
        token = await self._acquire_token()
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._config.timeout, transport=self._transport)

    def first_applications_url(self) -> str:
        """URL of the first applications page, selecting only needed fields."""
        select = ",".join(self.APPLICATION_FIELDS)
        return f"{self.GRAPH_BASE_URL}/applications?$select={select}&$top={self.PAGE_SIZE}"

    async def get_page(self, url: str) -> tuple[list[dict[str, Any]], str | None]:
        """
        Retrieve one page from a paginated Graph API endpoint.

        Args:
            url: Absolute URL of the page (first page or ``@odata.nextLink``).

        Returns:
            The page items and the next link, if any.
        """
        headers = await self._headers()

        async with self._http_client() as client:
            response = await client.get(url, headers=headers)
            response.raise_for_status()
            data = response.json()

        return data.get("value", []), data.get("@odata.nextLink")

    async def send_mail(self, sender: str, message: dict[str, Any]) -> None:
        """
        Send a mail as the given mailbox (requires Mail.Send).

        Args:
            sender: Mailbox address or user id to send from.
            message: ``sendMail`` request body.
        """
        headers = await self._headers()
        url = f"{self.GRAPH_BASE_URL}/users/{sender}/sendMail"

        async with self._http_client() as client:
            response = await client.post(url, headers=headers, json=message)
            response.raise_for_status()
