"""
Response schemas of the HTTP API.

Only aggregate figures and channel outcomes are exposed; credential names
and application ids never leave the process through the API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Self

from pydantic import BaseModel, Field

from ....application.services import DispatchReport
from ....application.use_cases import RunOutcome, RunResult
from ....domain.entities import ScanResult


class HealthResponse(BaseModel):
    """Liveness report of the service."""

    status: Literal["ok"] = "ok"
    version: str
    tenant: str
    timestamp: datetime


class ScanSummary(BaseModel):
    """Counts of one scan."""

    tenant_name: str
    scanned_at: datetime
    summary: str = Field(description="Human-readable one-line summary")
    applications_scanned: int
    affected_applications: int
    credentials_expiring: int = Field(description="Credentials inside the threshold window")
    expired: int
    expiring_soon: int

    @classmethod
    def from_scan(cls, scan: ScanResult) -> Self:
        return cls(
            tenant_name=scan.tenant_name,
            scanned_at=scan.scanned_at,
            summary=scan.get_summary(),
            applications_scanned=scan.total_applications_scanned,
            affected_applications=scan.affected_applications_count,
            credentials_expiring=scan.total_count,
            expired=scan.expired_count,
            expiring_soon=scan.expiring_soon_count,
        )


class ChannelResult(BaseModel):
    """Delivery outcome on one channel."""

    channel: str
    success: bool
    error: str | None = None


class DispatchSummary(BaseModel):
    """Delivery outcomes of one run, in dispatch order."""

    attempted: int
    succeeded: int
    failed: int
    channels: list[ChannelResult] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: DispatchReport) -> Self:
        return cls(
            attempted=report.attempted,
            succeeded=report.succeeded,
            failed=report.failed,
            channels=[
                ChannelResult(channel=o.channel, success=o.success, error=o.error)
                for o in report.outcomes
            ],
        )


class RunResponse(BaseModel):
    """One pipeline run: how it ended, what was found, what was delivered."""

    outcome: RunOutcome
    success: bool = Field(description="False only when every attempted channel failed")
    degraded: bool = Field(description="True when at least one channel failed")
    scan: ScanSummary
    dispatch: DispatchSummary

    @classmethod
    def from_run(cls, run: RunResult) -> Self:
        return cls(
            outcome=run.outcome,
            success=run.success,
            degraded=run.degraded,
            scan=ScanSummary.from_scan(run.scan),
            dispatch=DispatchSummary.from_report(run.dispatch),
        )


class ErrorResponse(BaseModel):
    """Error body returned by failing endpoints."""

    detail: str
