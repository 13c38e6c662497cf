"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import pytest

from entra_secret_watcher.domain.entities import ExpiringCredential, ScanResult
from entra_secret_watcher.domain.value_objects import CredentialType

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


class FakeChannel:
    """In-memory notification channel recording what it was sent."""

    def __init__(self, name: str, *, enabled: bool = True, error: Exception | None = None) -> None:
        self.name = name
        self.enabled = enabled
        self.error = error
        self.sent: list[ScanResult] = []

    def is_enabled(self) -> bool:
        return self.enabled

    async def send(self, result: ScanResult) -> None:
        self.sent.append(result)
        if self.error is not None:
            raise self.error


@pytest.fixture
def now() -> datetime:
    """Fixed current time used by scanner clocks."""
    return FIXED_NOW


@pytest.fixture
def make_credential() -> Callable[..., ExpiringCredential]:
    """Factory for expiring credentials relative to the fixed time."""

    def _make(
        days_left: int,
        *,
        application_name: str = "Test App",
        application_id: str = "00000000-0000-0000-0000-000000000001",
        credential_type: CredentialType = CredentialType.SECRET,
        display_name: str = "Test Secret",
    ) -> ExpiringCredential:
        return ExpiringCredential(
            application_name=application_name,
            application_id=application_id,
            credential_type=credential_type,
            display_name=display_name,
            expires_on=FIXED_NOW + timedelta(days=days_left),
            days_left=days_left,
        )

    return _make


@pytest.fixture
def make_result(
    make_credential: Callable[..., ExpiringCredential],
) -> Callable[..., ScanResult]:
    """Factory for scan results holding credentials with the given days left."""

    def _make(*days_left: int, total_applications_scanned: int = 5) -> ScanResult:
        return ScanResult(
            tenant_name="Contoso",
            tenant_id="tenant-id",
            scanned_at=FIXED_NOW,
            credentials=tuple(
                make_credential(d, display_name=f"Secret {i}") for i, d in enumerate(days_left)
            ),
            total_applications_scanned=total_applications_scanned,
        )

    return _make


@pytest.fixture
def make_channel() -> Callable[..., FakeChannel]:
    """Factory for fake notification channels."""
    return FakeChannel
