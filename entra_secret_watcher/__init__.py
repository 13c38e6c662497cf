"""Entra Secret Watcher - expiring credential scanner for Entra ID."""

__version__ = "1.0.0"
