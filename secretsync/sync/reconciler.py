"""Infisical -> GitHub environment reconciliation.

Run sequence:
1. resolve the target environment and its folder list
2. list existing GitHub secret names, fetch the environment public key
3. export every folder from infisical and compute secret names
4. diff, then upsert every computed secret (adds and updates alike)
5. when ``clean`` is set, delete GitHub secrets absent from the computed set

Failures before step 4 always abort. Per-secret failures are reported and
skipped unless ``strict`` is set, in which case the first one aborts the run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol

from ..common.secret_names import NameTemplate
from ..config import SyncConfig
from ..errors import DeleteError, ExportError, TargetEnvironmentError, UpsertError
from ..github.env_secrets import PublicKeyInfo
from ..infisical.export import EXPORT_EMPTY, ExportResult
from .folders import infisical_env_name, resolve_environment, resolve_folders
from .plan import ComputedSecrets, SyncPlan, plan_sync


class SecretsClient(Protocol):
    def list_secret_names(self, environment: str) -> List[str]:
        raise NotImplementedError

    def get_public_key(self, environment: str) -> PublicKeyInfo:
        raise NotImplementedError

    def upsert_secret(self, name: str, plaintext: str, public_key: PublicKeyInfo, environment: str) -> int:
        raise NotImplementedError

    def delete_secret(self, name: str, environment: str) -> None:
        raise NotImplementedError


class FolderExporter(Protocol):
    def export_folder(self, environment_name: str, folder_path: str) -> ExportResult:
        raise NotImplementedError


@dataclass
class SyncReport:
    environment: str
    folders: List[str]
    existing: int = 0
    computed: int = 0
    to_add: int = 0
    to_update: int = 0
    to_remove: int = 0
    skipped_folders: int = 0
    upserted: int = 0
    upsert_failed: int = 0
    removed: int = 0
    remove_failed: int = 0
    dry_run: bool = False


def _names(items: List[str]) -> str:
    return ", ".join(items)


def collect_computed_secrets(
    *,
    exporter: FolderExporter,
    environment_name: str,
    folders: List[str],
    template: NameTemplate,
    strict: bool,
    report: SyncReport,
) -> ComputedSecrets:
    """Export each folder in order and fold the results into one ComputedSecrets value."""
    acc = ComputedSecrets()
    for folder in folders:
        result = exporter.export_folder(environment_name, folder)

        if not result.ok:
            if result.status == EXPORT_EMPTY:
                msg = f"No secrets found for folder: {folder}"
            else:
                msg = f"Error while running command: {result.command}"
            print(f"[infisical][WARN] {msg}")
            if result.output:
                print(result.output)
            if strict:
                raise ExportError(msg)
            report.skipped_folders += 1
            continue

        acc = acc.with_folder(folder, result.secrets, template)
    return acc


def _print_plan(plan: SyncPlan, computed: ComputedSecrets, clean: bool) -> None:
    print("------------------------")
    print(f"[secretsync] secrets to add: {len(plan.to_add)} ({_names([s.name for s in plan.to_add])})")
    print(f"[secretsync] secrets to update: {len(plan.to_update)} ({_names([s.name for s in plan.to_update])})")
    if clean:
        print(f"[secretsync] secrets to remove: {len(plan.to_remove)} ({_names(plan.to_remove)})")
    print(f"[secretsync] computed secret names: {_names(computed.names)}")
    print("------------------------")


def apply_plan(
    *,
    client: SecretsClient,
    environment: str,
    computed: ComputedSecrets,
    plan: SyncPlan,
    public_key: PublicKeyInfo,
    strict: bool,
    clean: bool,
    report: SyncReport,
) -> None:
    for secret in computed.secrets:
        try:
            client.upsert_secret(secret.name, secret.value, public_key, environment)
        except UpsertError as e:
            if strict:
                raise
            print(f"[github][ERROR] {e}")
            report.upsert_failed += 1
            continue
        report.upserted += 1

    print(f"[secretsync] secrets updated: {report.upserted}/{len(computed)}")

    if not clean:
        return

    print(f"[secretsync] cleaning {len(plan.to_remove)} secrets")
    for name in plan.to_remove:
        try:
            client.delete_secret(name, environment)
        except DeleteError as e:
            if strict:
                raise
            print(f"[github][ERROR] {e}")
            report.remove_failed += 1
            continue
        report.removed += 1

    print(f"[secretsync] secrets removed: {report.removed}/{len(plan.to_remove)}")


def run_sync(
    *,
    config: SyncConfig,
    environment: str,
    client: SecretsClient,
    exporter: FolderExporter,
    dry_run: bool = False,
) -> SyncReport:
    """Reconcile one GitHub environment with its configured infisical folders.

    Raises:
        TargetEnvironmentError: unset/unconfigured environment or empty folder set.
        FetchError: listing secrets or fetching the public key failed.
        ExportError, UpsertError, DeleteError: only when ``config.strict`` is set.
    """
    env_name, env_cfg = resolve_environment(config, environment)
    print(f"[secretsync] target environment: {env_name}")

    folders = resolve_folders(config.common_folders, env_cfg.folders)
    if not folders:
        raise TargetEnvironmentError(f"No folders to check for secrets on infisical: {env_name}")
    print("[secretsync] folders to check for secrets on infisical:")
    for folder in folders:
        print(f"    - {folder}")

    report = SyncReport(environment=env_name, folders=folders, dry_run=dry_run)

    existing = client.list_secret_names(env_name)
    report.existing = len(existing)
    print(f"[secretsync] secrets found on github: {len(existing)}")

    public_key = client.get_public_key(env_name)
    print(f"[github] public key fetched (key_id={public_key.key_id})")

    computed = collect_computed_secrets(
        exporter=exporter,
        environment_name=infisical_env_name(env_name, env_cfg),
        folders=folders,
        template=env_cfg.variable_name,
        strict=config.strict,
        report=report,
    )
    report.computed = len(computed)
    print(f"[secretsync] secrets found on infisical: {len(computed)}")

    plan = plan_sync(computed, existing)
    report.to_add = len(plan.to_add)
    report.to_update = len(plan.to_update)
    report.to_remove = len(plan.to_remove) if config.clean else 0
    _print_plan(plan, computed, config.clean)

    if dry_run:
        print("[secretsync] dry run: no changes applied")
        return report

    apply_plan(
        client=client,
        environment=env_name,
        computed=computed,
        plan=plan,
        public_key=public_key,
        strict=config.strict,
        clean=config.clean,
        report=report,
    )
    print("[secretsync] done")
    return report
