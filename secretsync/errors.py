from __future__ import annotations


class SyncError(Exception):
    """Base class for secret sync errors."""


class ConfigError(SyncError):
    """Raised when the sync configuration or runtime inputs are missing or malformed."""


class TargetEnvironmentError(SyncError):
    """Raised when the target environment is unset, unconfigured, or resolves to no folders."""


class ExportError(SyncError):
    """Raised when an infisical folder export fails in strict mode."""


class FetchError(SyncError):
    """Raised when listing secrets or fetching the public key from GitHub fails."""


class UpsertError(SyncError):
    """Raised when creating or updating a GitHub secret fails."""


class DeleteError(SyncError):
    """Raised when deleting a GitHub secret fails."""


class DependencyError(SyncError):
    """Raised when a required runtime dependency is not installed."""
