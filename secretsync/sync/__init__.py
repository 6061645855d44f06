"""Reconciliation of infisical folders into a GitHub environment."""

from .reconciler import SyncReport, run_sync  # noqa: F401
