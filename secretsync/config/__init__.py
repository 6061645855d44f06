"""Sync configuration.

The configuration file is the single source of truth for which infisical
folders feed which GitHub environment. See config/sync_config.example.yml.
"""
from __future__ import annotations

from .load_sync_config import EnvironmentConfig, SyncConfig, load_sync_config  # noqa: F401
