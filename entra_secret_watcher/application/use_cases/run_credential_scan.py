"""Use case running one scan-classify-dispatch pipeline execution."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum, auto

from ...domain.entities import ScanResult
from ...domain.value_objects import TenantContext
from ..ports import NotificationChannel, NullTracer, Tracer
from ..services import CredentialScanner, DispatchReport, NotificationDispatcher

logger = logging.getLogger(__name__)


class RunOutcome(StrEnum):
    """How a pipeline run ended."""

    NO_EXPIRING = auto()
    DRY_RUN = auto()
    DISPATCHED = auto()

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class RunResult:
    """Result of one pipeline run."""

    outcome: RunOutcome
    scan: ScanResult
    dispatch: DispatchReport = DispatchReport()

    @property
    def dry_run(self) -> bool:
        """Check if delivery was suppressed by dry-run mode."""
        return self.outcome == RunOutcome.DRY_RUN

    @property
    def degraded(self) -> bool:
        """Check if at least one channel failed to deliver."""
        return self.dispatch.failed > 0

    @property
    def success(self) -> bool:
        """False only when channels were attempted and every one of them failed."""
        return not self.dispatch.all_failed


class RunCredentialScan:
    """
    Use case for scanning a tenant and dispatching notifications.

    Scan failures are logged and re-raised unchanged so the caller's
    scheduler can apply its own retry policy. Channel failures never fail
    the run; they are reported in the RunResult.
    """

    def __init__(
        self,
        scanner: CredentialScanner,
        dispatcher: NotificationDispatcher,
        channels: Sequence[NotificationChannel],
        tenant: TenantContext,
        *,
        dry_run: bool = False,
        grouped_report: bool = True,
        tracer: Tracer | None = None,
    ) -> None:
        """
        Initialize the use case.

        Args:
            scanner: Application service scanning the directory.
            dispatcher: Application service fanning out notifications.
            channels: All notification channels, enabled or not.
            tenant: Identity of the tenant to scan.
            dry_run: If True, log what would be sent instead of sending.
            grouped_report: If True, send one notification per run;
                otherwise one per credential.
            tracer: Optional tracer for the run span.
        """
        self._scanner = scanner
        self._dispatcher = dispatcher
        self._channels = list(channels)
        self._tenant = tenant
        self._dry_run = dry_run
        self._grouped_report = grouped_report
        self._tracer = tracer or NullTracer()

    async def run_once(self, cancel_event: asyncio.Event | None = None) -> RunResult:
        """
        Execute one pipeline run.

        Args:
            cancel_event: Optional event aborting traversal and dispatch
                when set. Notifications already delivered are kept.

        Returns:
            RunResult describing how the run ended.

        Raises:
            UpstreamUnavailableError: If the scan fails.
        """
        with self._tracer.start_span("credential_scan_job") as span:
            logger.info("Credential scan job started (dry run: %s)", self._dry_run)

            try:
                result = await self._scanner.scan(self._tenant, cancel_event=cancel_event)
            except Exception:
                logger.exception("Credential scan job failed")
                raise

            span.set_attribute("scan.credentials_found", result.total_count)
            span.set_attribute("scan.apps_scanned", result.total_applications_scanned)

            if not result.has_expiring:
                logger.info("No expiring credentials found. All clear!")
                return RunResult(outcome=RunOutcome.NO_EXPIRING, scan=result)

            logger.warning(
                "Found %d expiring credential(s): %d expired, %d expiring soon",
                result.total_count,
                result.expired_count,
                result.expiring_soon_count,
            )

            if self._dry_run:
                self._log_dry_run(result)
                return RunResult(outcome=RunOutcome.DRY_RUN, scan=result)

            report = await self._dispatch(result, cancel_event)
            span.set_attribute("dispatch.failed", report.failed)

            if report.all_failed:
                logger.warning(
                    "All %d notification attempt(s) failed: %s",
                    report.attempted,
                    ", ".join(report.failed_channels),
                )
            elif report.failed:
                logger.warning(
                    "%d of %d notification attempt(s) failed: %s",
                    report.failed,
                    report.attempted,
                    ", ".join(report.failed_channels),
                )

            logger.info("Credential scan job completed")
            return RunResult(outcome=RunOutcome.DISPATCHED, scan=result, dispatch=report)

    async def _dispatch(
        self, result: ScanResult, cancel_event: asyncio.Event | None
    ) -> DispatchReport:
        """Dispatch one grouped result, or one result per credential."""
        batches = [result] if self._grouped_report else result.split()

        reports: list[DispatchReport] = []
        for batch in batches:
            reports.append(
                await self._dispatcher.dispatch(batch, self._channels, cancel_event=cancel_event)
            )
        return DispatchReport.merge(reports)

    def _log_dry_run(self, result: ScanResult) -> None:
        """Log what would have been sent in dry run mode."""
        logger.info(
            "[DRY-RUN] Would send notifications for %d credential(s). Skipping.",
            result.total_count,
        )
        for cred in result.credentials:
            logger.info(
                "[DRY-RUN] %s - %s '%s' - %s",
                cred.application_name,
                cred.credential_type,
                cred.display_name,
                cred.status_label,
            )
