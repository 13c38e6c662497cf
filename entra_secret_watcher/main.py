#!/usr/bin/env python3
"""
Entra Secret Watcher entry point.

Builds the adapters from settings and drives the scan pipeline in one of
three modes: a single run, a cron schedule, or behind the HTTP API.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import UTC, datetime
from enum import StrEnum
from functools import cached_property

import uvicorn
from croniter import croniter

from . import __version__
from .application.exceptions import ConfigurationError, UpstreamUnavailableError
from .application.ports import NotificationChannel, NullTracer, Tracer
from .application.services import CredentialScanner, NotificationDispatcher
from .application.use_cases import RunCredentialScan, RunResult
from .infrastructure.adapters import (
    EntraIdDirectoryClient,
    GotifyNotificationChannel,
    GraphClient,
    GraphEmailNotificationChannel,
    OpenTelemetryTracer,
    TeamsNotificationChannel,
)
from .infrastructure.adapters.api import create_app
from .infrastructure.config import Settings, load_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


class RunMode(StrEnum):
    ONCE = "once"
    SCHEDULED = "scheduled"
    API = "api"


class ServiceContainer:
    """Builds the adapters and the pipeline from settings."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @cached_property
    def graph_client(self) -> GraphClient:
        """Graph client shared by the directory reader and the mail channel."""
        return GraphClient(self._settings.graph_config)

    @cached_property
    def tracer(self) -> Tracer:
        return OpenTelemetryTracer() if self._settings.tracing_enabled else NullTracer()

    def notification_channels(self) -> list[NotificationChannel]:
        """Every known channel, in dispatch order; disabled ones are skipped later."""
        return [
            GotifyNotificationChannel(self._settings.gotify_config),
            GraphEmailNotificationChannel(self._settings.graph_email_config, self.graph_client),
            TeamsNotificationChannel(self._settings.teams_config),
        ]

    def pipeline(self) -> RunCredentialScan:
        channels = self.notification_channels()
        logger.info(
            "Enabled notification channels: %s",
            ", ".join(c.name for c in channels if c.is_enabled()) or "none",
        )
        return RunCredentialScan(
            scanner=CredentialScanner(
                EntraIdDirectoryClient(self.graph_client),
                self._settings.threshold,
                tracer=self.tracer,
            ),
            dispatcher=NotificationDispatcher(tracer=self.tracer),
            channels=channels,
            tenant=self._settings.tenant,
            dry_run=self._settings.dry_run,
            grouped_report=self._settings.grouped_report,
            tracer=self.tracer,
        )


class Service:
    """Runs the pipeline in the configured mode."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._container = ServiceContainer(settings)

    @cached_property
    def _pipeline(self) -> RunCredentialScan:
        return self._container.pipeline()

    @property
    def mode(self) -> RunMode:
        """API_ENABLED wins over RUN_MODE; raises ValueError for an unknown RUN_MODE."""
        if self._settings.api_enabled:
            return RunMode.API
        return RunMode(self._settings.run_mode.strip().lower())

    async def run_once(self) -> RunResult:
        return await self._pipeline.run_once()

    async def run_schedule(self) -> None:
        """Run now, then at every cron occurrence until cancelled."""
        schedule = croniter(self._settings.cron_schedule, datetime.now(UTC))
        logger.info("Scheduled mode, cron '%s'", self._settings.cron_schedule)

        while True:
            await self._scheduled_run()

            next_run = schedule.get_next(datetime)
            if next_run.tzinfo is None:
                next_run = next_run.replace(tzinfo=UTC)
            delay = (next_run - datetime.now(UTC)).total_seconds()
            logger.info("Next run at %s", next_run.isoformat())
            await asyncio.sleep(max(delay, 0.0))

    async def _scheduled_run(self) -> None:
        """A failed run is logged; the schedule itself is the retry."""
        try:
            await self.run_once()
        except UpstreamUnavailableError as e:
            logger.error("Scan failed, retrying at the next occurrence: %s", e)
        except Exception:
            logger.exception("Run failed unexpectedly, retrying at the next occurrence")

    async def serve_api(self) -> None:
        app = create_app(
            self.run_once,
            tenant_name=self._settings.tenant_name,
            version=__version__,
        )
        server = uvicorn.Server(
            uvicorn.Config(
                app,
                host=self._settings.api_host,
                port=self._settings.api_port,
                log_level=self._settings.log_level.lower(),
            )
        )
        logger.info("Serving API on %s:%d", self._settings.api_host, self._settings.api_port)
        await server.serve()

    async def run(self) -> int:
        """
        Run in the configured mode.

        Returns:
            Process exit code. A single run exits 1 when every attempted
            channel failed.
        """
        try:
            mode = self.mode
        except ValueError:
            logger.error(
                "Invalid RUN_MODE '%s', expected 'once' or 'scheduled' (or API_ENABLED=true)",
                self._settings.run_mode,
            )
            return 1

        match mode:
            case RunMode.ONCE:
                run = await self.run_once()
                return 0 if run.success else 1
            case RunMode.SCHEDULED:
                await self.run_schedule()
            case RunMode.API:
                await self.serve_api()
        return 0


async def async_main() -> int:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 1

    configure_logging(settings.log_level)
    logger.info("Entra Secret Watcher %s, tenant %s", __version__, settings.tenant_name)

    try:
        return await Service(settings).run()
    except UpstreamUnavailableError as e:
        logger.error("Scan failed: %s", e)
        return 1
    except Exception:
        logger.exception("Unexpected error")
        return 1


def main() -> None:
    """Console script entry point."""
    configure_logging()
    try:
        exit_code = asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        exit_code = 0
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
