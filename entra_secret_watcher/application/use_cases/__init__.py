"""Application use cases."""

from .run_credential_scan import RunCredentialScan, RunOutcome, RunResult

__all__ = [
    "RunCredentialScan",
    "RunOutcome",
    "RunResult",
]
