"""Runtime bootstrap for scripts executed as files.

`python scripts/<name>.py` puts the scripts directory on sys.path[0], not the
repository root, so the secretsync package is not importable without this.
"""

from __future__ import annotations

from pathlib import Path
import sys


def ensure_repo_root_on_sys_path() -> Path:
    """Ensure the repository root is importable and return it."""
    repo_root = Path(__file__).resolve().parent.parent

    s_repo = str(repo_root)
    if s_repo not in sys.path:
        sys.path.insert(0, s_repo)

    return repo_root
