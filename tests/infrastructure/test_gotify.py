"""Tests for Gotify notification channel."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from entra_secret_watcher.application.exceptions import ChannelDeliveryError
from entra_secret_watcher.domain.entities import ScanResult
from entra_secret_watcher.infrastructure.adapters.notifications.gotify import (
    GotifyConfig,
    GotifyNotificationChannel,
    build_plain_text,
    compute_priority,
)


class TestGotifyRendering:
    """Tests for Gotify priority and plain-text rendering."""

    def test_priority_with_expired(self, make_result: Callable[..., ScanResult]) -> None:
        """Expired credentials give the highest priority."""
        assert compute_priority(make_result(-1, 5)) == 9

    def test_priority_with_expiring_soon(self, make_result: Callable[..., ScanResult]) -> None:
        """Only expiring credentials give a medium priority."""
        assert compute_priority(make_result(5)) == 6

    def test_priority_otherwise(self, make_result: Callable[..., ScanResult]) -> None:
        """Credentials beyond the label window give a low priority."""
        assert compute_priority(make_result(45)) == 3

    def test_plain_text(self, make_result: Callable[..., ScanResult]) -> None:
        """The text block has a header and one entry per credential."""
        text = build_plain_text(make_result(-2, 9, total_applications_scanned=42))

        assert text.startswith("🔐 Entra ID Credential Report — Contoso\n")
        assert "Scanned at: 2026-01-15 12:00 UTC" in text
        assert "Applications scanned: 42" in text
        assert "Credentials expiring: 2 (Expired: 1, Expiring soon: 1)" in text
        assert "🔴 Test App" in text
        assert "🟠 Test App" in text
        assert "EXPIRED since 2 day(s) (Expires: 2026-01-13)" in text
        assert "Expires in 9 day(s) (Expires: 2026-01-24)" in text
        assert "Type: Secret | Name: Secret 0" in text

    def test_credentials_beyond_thirty_days_use_warning_icon(
        self, make_result: Callable[..., ScanResult]
    ) -> None:
        """Included credentials past the 30-day label window still read as a warning."""
        text = build_plain_text(make_result(45))

        assert "🟠 Test App" in text
        assert "🟢" not in text


class TestGotifyNotificationChannel:
    """Tests for GotifyNotificationChannel."""

    def test_enabled_flag(self) -> None:
        """is_enabled mirrors the config flag."""
        assert GotifyNotificationChannel(GotifyConfig()).is_enabled() is False
        assert GotifyNotificationChannel(GotifyConfig(enabled=True)).is_enabled() is True

    @pytest.mark.asyncio
    async def test_send_posts_message(self, make_result: Callable[..., ScanResult]) -> None:
        """send() posts title, message and priority to the message endpoint."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"id": 1})

        config = GotifyConfig(enabled=True, url="https://gotify.example.com/", token="abc")
        channel = GotifyNotificationChannel(config, transport=httpx.MockTransport(handler))

        await channel.send(make_result(-1, 3))

        request = requests[0]
        assert request.method == "POST"
        assert request.url.host == "gotify.example.com"
        assert request.url.path == "/message"
        assert request.url.params["token"] == "abc"
        payload = json.loads(request.content)
        assert payload["priority"] == 9
        assert payload["title"] == "🔐 Entra ID — Contoso: 2 credential(s) expiring"
        assert "Credentials expiring: 2" in payload["message"]

    @pytest.mark.asyncio
    async def test_http_error_raises_delivery_error(
        self, make_result: Callable[..., ScanResult]
    ) -> None:
        """A failing server is reported as ChannelDeliveryError."""
        config = GotifyConfig(enabled=True, url="https://gotify.example.com", token="abc")
        channel = GotifyNotificationChannel(
            config, transport=httpx.MockTransport(lambda request: httpx.Response(500))
        )

        with pytest.raises(ChannelDeliveryError, match="HTTP 500"):
            await channel.send(make_result(-1))

    @pytest.mark.asyncio
    async def test_connection_error_raises_delivery_error(
        self, make_result: Callable[..., ScanResult]
    ) -> None:
        """Transport errors are reported as ChannelDeliveryError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        config = GotifyConfig(enabled=True, url="https://gotify.example.com", token="abc")
        channel = GotifyNotificationChannel(config, transport=httpx.MockTransport(handler))

        with pytest.raises(ChannelDeliveryError, match="connection refused") as exc_info:
            await channel.send(make_result(-1))

        assert exc_info.value.channel == "Gotify"
