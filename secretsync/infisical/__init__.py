"""Infisical CLI integration."""

from .export import ExportResult, InfisicalExporter, RawSecret  # noqa: F401
