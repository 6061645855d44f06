from __future__ import annotations

import argparse
from typing import List, Optional

from .config import load_sync_config
from .errors import SyncError
from .github.env_secrets import GitHubEnvironmentSecretsClient
from .github.sealed_box import ensure_sealed_box_support
from .infisical.export import InfisicalExporter
from .runtime.settings import config_path_from_env, load_runtime_settings, target_environment_from_env
from .sync.folders import resolve_environment
from .sync.reconciler import run_sync


def cmd_sync(args: argparse.Namespace) -> int:
    ensure_sealed_box_support()

    config_path = config_path_from_env(args.config)
    config = load_sync_config(config_path)
    print(f"[secretsync] configuration file loaded: {config_path}")

    environment = target_environment_from_env(args.environment)
    env_name, env_cfg = resolve_environment(config, environment)

    settings = load_runtime_settings(config_path=config_path, target_environment=env_name)
    client = GitHubEnvironmentSecretsClient(
        repository=settings.repository,
        repository_id=settings.repository_id,
        token=settings.token,
    )
    exporter = InfisicalExporter(binary=args.infisical_bin, extra_args=env_cfg.infisical_args)

    run_sync(config=config, environment=env_name, client=client, exporter=exporter, dry_run=bool(args.dry_run))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="secretsync",
        description="Sync infisical folders into a GitHub environment's Actions secrets.",
    )
    p.add_argument("--config", default=None, help="Sync config path (default: $INPUT_CONFIG_PATH)")
    p.add_argument("--environment", default=None, help="GitHub environment to sync (default: $TARGET_ENVIRONMENT)")
    p.add_argument("--infisical-bin", default="infisical", help="infisical CLI executable")
    p.add_argument("--dry-run", action="store_true", help="Print the plan without changing GitHub secrets")
    p.set_defaults(func=cmd_sync)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args) or 0)
    except SyncError as e:
        print(f"[secretsync][FAIL] {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
