#!/usr/bin/env python3
"""Validate a sync config file without touching infisical or GitHub.

Usage:
  python scripts/smoke_load_sync_config.py [path]   # default: config/sync_config.example.yml
"""
from __future__ import annotations

try:
    from repo_bootstrap import ensure_repo_root_on_sys_path
except ModuleNotFoundError:  # pragma: no cover
    from scripts.repo_bootstrap import ensure_repo_root_on_sys_path

_REPO_ROOT = ensure_repo_root_on_sys_path()

import sys

from secretsync.config import load_sync_config
from secretsync.errors import ConfigError
from secretsync.sync.folders import resolve_folders


def main() -> int:
    path = sys.argv[1] if len(sys.argv) > 1 else str(_REPO_ROOT / "config" / "sync_config.example.yml")
    try:
        cfg = load_sync_config(path)
    except ConfigError as e:
        print(f"[SMOKE][FAIL] {e}")
        return 1
    print(f"[SMOKE][OK] sync config loaded: {path}")
    print(f"[SMOKE][OK] strict={cfg.strict} clean={cfg.clean}")
    for name, env_cfg in sorted(cfg.environments.items()):
        folders = resolve_folders(cfg.common_folders, env_cfg.folders)
        print(f"[SMOKE][OK] environment={name} infisical_env={env_cfg.infisical_env_name!r} folders={folders}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
