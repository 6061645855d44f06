"""Infisical -> GitHub environment secrets sync.

Reads a static folder configuration, exports secrets per folder with the
``infisical`` CLI and reconciles them into a GitHub environment's Actions
secrets (sealed with the environment public key before upload).
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
