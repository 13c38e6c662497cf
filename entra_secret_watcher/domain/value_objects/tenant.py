"""Tenant context value object."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TenantContext:
    """Identity of the tenant being scanned."""

    tenant_id: str
    tenant_name: str = "Default"
