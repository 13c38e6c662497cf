"""Entra ID adapters - Microsoft Graph directory access."""

from .directory import EntraIdDirectoryClient
from .graph_client import GraphClient, GraphClientConfig

__all__ = [
    "EntraIdDirectoryClient",
    "GraphClient",
    "GraphClientConfig",
]
