"""Scanner driving directory traversal and credential classification."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Iterator
from datetime import UTC, datetime
from operator import attrgetter

from ...domain.entities import CredentialRecord, ExpiringCredential, ScanResult
from ...domain.services import days_between
from ...domain.value_objects import CredentialType, ScanThreshold, TenantContext
from ..exceptions import UpstreamUnavailableError
from ..ports import ApplicationRecord, CredentialItem, DirectoryClient, NullTracer, Tracer

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CredentialScanner:
    """
    Application service that scans every application in a tenant.

    Walks the directory page by page, keeps only credentials inside the
    threshold window and aggregates them into a ScanResult.
    """

    def __init__(
        self,
        directory: DirectoryClient,
        threshold: ScanThreshold,
        *,
        tracer: Tracer | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """
        Initialize the scanner.

        Args:
            directory: Adapter listing application registrations.
            threshold: Inclusion window for expiring credentials.
            tracer: Optional tracer for scan spans.
            clock: Source of the current time.
        """
        self._directory = directory
        self._threshold = threshold
        self._tracer = tracer or NullTracer()
        self._clock = clock

    async def scan(
        self,
        tenant: TenantContext,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> ScanResult:
        """
        Scan all applications of the tenant for expiring credentials.

        Args:
            tenant: Identity of the tenant being scanned.
            cancel_event: Optional event; when set, traversal stops with
                asyncio.CancelledError before the next page.

        Returns:
            ScanResult sorted by days left, most urgent first.

        Raises:
            UpstreamUnavailableError: If the directory cannot be read.
        """
        with self._tracer.start_span("scan_credentials") as span:
            span.set_attribute("tenant.id", tenant.tenant_id)
            span.set_attribute("tenant.name", tenant.tenant_name)

            logger.info(
                "Starting credential scan for tenant %s (%s)",
                tenant.tenant_name,
                tenant.tenant_id,
            )

            now = self._clock()
            expiring: list[ExpiringCredential] = []
            total_apps = 0

            async for application in self._iter_applications(cancel_event):
                total_apps += 1
                for record in self._iter_credentials(application):
                    days_left = days_between(now, record.expires_on)
                    if self._threshold.includes(days_left):
                        expiring.append(ExpiringCredential.from_record(record, days_left))

            expiring.sort(key=attrgetter("days_left"))

            logger.info(
                "Scan complete for %s: %d apps scanned, %d credential(s) expiring within %d days",
                tenant.tenant_name,
                total_apps,
                len(expiring),
                self._threshold.days,
            )
            span.set_attribute("apps.total", total_apps)
            span.set_attribute("credentials.expiring", len(expiring))

            return ScanResult(
                tenant_name=tenant.tenant_name,
                tenant_id=tenant.tenant_id,
                scanned_at=self._clock(),
                credentials=tuple(expiring),
                total_applications_scanned=total_apps,
            )

    async def _iter_applications(
        self, cancel_event: asyncio.Event | None
    ) -> AsyncIterator[ApplicationRecord]:
        """Yield applications across all pages, one cursor walk."""
        page_token: str | None = None

        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise asyncio.CancelledError

            try:
                page = await self._directory.list_applications(page_token)
            except Exception as e:
                msg = f"Failed to list applications from directory: {e}"
                raise UpstreamUnavailableError(msg) from e

            for application in page.applications:
                yield application

            page_token = page.next_page_token
            if not page_token:
                return

    @staticmethod
    def _iter_credentials(application: ApplicationRecord) -> Iterator[CredentialRecord]:
        """Yield secrets then certificates that have an expiration date."""
        app_name = application.display_name or "Unknown"
        app_id = application.app_id or "Unknown"

        sources: tuple[tuple[CredentialType, tuple[CredentialItem, ...]], ...] = (
            (CredentialType.SECRET, application.password_credentials),
            (CredentialType.CERTIFICATE, application.key_credentials),
        )
        for credential_type, items in sources:
            for item in items:
                if item.expires_on is None:
                    logger.debug(
                        "Skipping %s '%s' of %s without expiry date",
                        credential_type,
                        item.display_name,
                        app_name,
                    )
                    continue

                yield CredentialRecord(
                    application_name=app_name,
                    application_id=app_id,
                    credential_type=credential_type,
                    display_name=item.display_name or "Unnamed",
                    expires_on=item.expires_on,
                )
