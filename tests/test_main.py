"""Tests for the composition root and run modes."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from unittest.mock import AsyncMock, patch

import pytest

from entra_secret_watcher.application.exceptions import UpstreamUnavailableError
from entra_secret_watcher.application.ports import NullTracer
from entra_secret_watcher.application.services import ChannelOutcome, DispatchReport
from entra_secret_watcher.application.use_cases import RunCredentialScan, RunOutcome, RunResult
from entra_secret_watcher.domain.entities import ScanResult
from entra_secret_watcher.infrastructure.adapters import OpenTelemetryTracer
from entra_secret_watcher.infrastructure.config import Settings
from entra_secret_watcher.main import RunMode, Service, ServiceContainer


@pytest.fixture
def settings() -> Settings:
    """Settings with Teams enabled and the other channels off."""
    return Settings(
        azure_tenant_id="tenant-id",
        azure_client_id="client-id",
        azure_client_secret="client-secret",
        tenant_name="Contoso",
        threshold_days=30,
        cron_schedule="0 8 * * *",
        dry_run=False,
        grouped_report=True,
        run_mode="once",
        log_level="INFO",
        tracing_enabled=False,
        email_enabled=False,
        gotify_enabled=False,
        teams_enabled=True,
        teams_webhook_url="https://teams.example.com/hook",
        api_enabled=False,
        api_host="127.0.0.1",
        api_port=8080,
    )


def _run(scan: ScanResult, *outcomes: ChannelOutcome) -> RunResult:
    return RunResult(
        outcome=RunOutcome.DISPATCHED,
        scan=scan,
        dispatch=DispatchReport(outcomes=outcomes),
    )


class TestServiceContainer:
    """Tests for ServiceContainer wiring."""

    def test_creates_all_channels(self, settings: Settings) -> None:
        """All three channels are created; only configured ones are enabled."""
        channels = ServiceContainer(settings).notification_channels()

        assert [c.name for c in channels] == ["Gotify", "Email (Graph API)", "Teams (Webhook)"]
        assert [c.is_enabled() for c in channels] == [False, False, True]

    def test_graph_client_is_shared(self, settings: Settings) -> None:
        """Scanner and email channel share one Graph client."""
        container = ServiceContainer(settings)
        assert container.graph_client is container.graph_client

    def test_tracer_selection(self, settings: Settings) -> None:
        """The OpenTelemetry tracer is only used when enabled."""
        assert isinstance(ServiceContainer(settings).tracer, NullTracer)
        settings.tracing_enabled = True
        assert isinstance(ServiceContainer(settings).tracer, OpenTelemetryTracer)

    def test_builds_pipeline(self, settings: Settings) -> None:
        """The pipeline is wired from settings."""
        assert isinstance(ServiceContainer(settings).pipeline(), RunCredentialScan)


class TestRunModes:
    """Tests for Service.run() mode selection and exit codes."""

    def test_api_enabled_wins_over_run_mode(self, settings: Settings) -> None:
        """API_ENABLED selects API mode whatever RUN_MODE says."""
        settings.run_mode = "scheduled"
        settings.api_enabled = True
        assert Service(settings).mode == RunMode.API

    @pytest.mark.asyncio
    async def test_invalid_run_mode(self, settings: Settings) -> None:
        """An unknown run mode exits with code 1."""
        settings.run_mode = "sometimes"
        assert await Service(settings).run() == 1

    @pytest.mark.asyncio
    async def test_once_exit_codes(
        self, settings: Settings, make_result: Callable[..., ScanResult]
    ) -> None:
        """A single run exits 1 only when every attempted channel failed."""
        service = Service(settings)
        scan = make_result(3)

        service.run_once = AsyncMock(  # type: ignore[method-assign]
            return_value=_run(scan, ChannelOutcome("A", True), ChannelOutcome("B", False, "x"))
        )
        assert await service.run() == 0

        service.run_once = AsyncMock(  # type: ignore[method-assign]
            return_value=_run(scan, ChannelOutcome("A", False, "x"))
        )
        assert await service.run() == 1

    @pytest.mark.asyncio
    async def test_api_mode_serves_inside_running_loop(self, settings: Settings) -> None:
        """API mode awaits the uvicorn server on the current event loop."""
        settings.api_enabled = True

        with patch("uvicorn.Server.serve", new_callable=AsyncMock) as serve:
            assert await Service(settings).run() == 0

        serve.assert_awaited_once()


class TestSchedule:
    """Tests for the cron loop."""

    @pytest.mark.asyncio
    async def test_failed_runs_do_not_stop_the_schedule(
        self, settings: Settings, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Both expected and unexpected run failures are logged and the loop goes on."""
        service = Service(settings)
        service.run_once = AsyncMock(  # type: ignore[method-assign]
            side_effect=[
                RuntimeError("boom"),
                UpstreamUnavailableError("directory down"),
                None,
                asyncio.CancelledError(),
            ]
        )

        with (
            patch("entra_secret_watcher.main.asyncio.sleep", new_callable=AsyncMock) as sleep,
            caplog.at_level(logging.INFO),
            pytest.raises(asyncio.CancelledError),
        ):
            await service.run_schedule()

        assert service.run_once.await_count == 4
        assert sleep.await_count == 3
        messages = [r.getMessage() for r in caplog.records]
        assert any("Run failed unexpectedly" in m for m in messages)
        assert any("directory down" in m for m in messages)

    @pytest.mark.asyncio
    async def test_cancellation_ends_the_schedule(self, settings: Settings) -> None:
        """Cancelling a run stops the loop before the next sleep."""
        service = Service(settings)
        service.run_once = AsyncMock(  # type: ignore[method-assign]
            side_effect=asyncio.CancelledError()
        )

        with (
            patch("entra_secret_watcher.main.asyncio.sleep", new_callable=AsyncMock) as sleep,
            pytest.raises(asyncio.CancelledError),
        ):
            await service.run_schedule()

        sleep.assert_not_awaited()
