"""FastAPI adapter exposing health, the latest run and on-demand runs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime

from fastapi import APIRouter, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from ....application.exceptions import UpstreamUnavailableError
from ....application.use_cases import RunResult
from .models import ErrorResponse, HealthResponse, RunResponse

logger = logging.getLogger(__name__)

RunFunc = Callable[[], Awaitable[RunResult]]


class RunCoordinator:
    """Runs the pipeline one request at a time and keeps the latest result."""

    def __init__(self, run_func: RunFunc) -> None:
        self._run_func = run_func
        self._lock = asyncio.Lock()
        self.latest: RunResult | None = None

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def trigger(self) -> RunResult:
        """Run the pipeline, waiting for any run already in progress."""
        async with self._lock:
            run = await self._run_func()
            self.latest = run
            return run


def create_app(
    run_func: RunFunc,
    *,
    tenant_name: str = "Default",
    version: str = "1.0.0",
) -> FastAPI:
    """
    Build the HTTP API around a pipeline run function.

    Args:
        run_func: Coroutine function executing one pipeline run.
        tenant_name: Friendly name of the scanned tenant.
        version: Service version reported by the health endpoint.

    Returns:
        The FastAPI application.
    """
    coordinator = RunCoordinator(run_func)
    api = APIRouter(prefix="/api/v1", tags=["Runs"])

    @api.get(
        "/report",
        response_model=RunResponse,
        summary="Latest run",
        responses={404: {"model": ErrorResponse}},
    )
    async def latest_run() -> RunResponse:
        if coordinator.latest is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No run yet; trigger one with POST /api/v1/check",
            )
        return RunResponse.from_run(coordinator.latest)

    @api.post(
        "/check",
        response_model=RunResponse,
        summary="Run a scan now",
        description="Scans the tenant and notifies enabled channels unless dry-run is on. "
        "Concurrent requests are queued and run one after another.",
        responses={502: {"model": ErrorResponse}},
    )
    async def trigger_run() -> RunResponse:
        if coordinator.busy:
            logger.info("API: run already in progress, queuing request")
        try:
            run = await coordinator.trigger()
        except UpstreamUnavailableError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Directory unavailable: {e}",
            ) from e
        return RunResponse.from_run(run)

    app = FastAPI(
        title="Entra Secret Watcher",
        description="Expiry monitoring for Entra ID application secrets and certificates. "
        "Responses carry counts and channel outcomes only, never credential details.",
        version=version,
    )
    app.include_router(api)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(version=version, tenant=tenant_name, timestamp=datetime.now(UTC))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("API: %s %s failed", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    return app
