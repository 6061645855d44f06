from __future__ import annotations

from typing import Iterable, List, Tuple

from ..config import EnvironmentConfig, SyncConfig
from ..errors import TargetEnvironmentError


def normalize_folder(folder: str) -> str:
    """Return ``folder`` with exactly one leading "/" ("frontend" -> "/frontend", "//a" -> "/a")."""
    return "/" + str(folder).lstrip("/")


def resolve_folders(common_folders: Iterable[str], env_folders: Iterable[str]) -> List[str]:
    """Normalized union of common and environment folders, first occurrence wins."""
    out: List[str] = []
    seen = set()
    for raw in [*common_folders, *env_folders]:
        folder = normalize_folder(raw)
        if folder in seen:
            continue
        seen.add(folder)
        out.append(folder)
    return out


def resolve_environment(config: SyncConfig, name: str) -> Tuple[str, EnvironmentConfig]:
    env_name = str(name or "").strip()
    if not env_name:
        raise TargetEnvironmentError("No environment detected (set TARGET_ENVIRONMENT or pass --environment)")
    env_cfg = config.environments.get(env_name)
    if env_cfg is None:
        raise TargetEnvironmentError(f"No configuration found for environment: {env_name}")
    return env_name, env_cfg


def infisical_env_name(env_name: str, env_cfg: EnvironmentConfig) -> str:
    """Infisical environment slug; the GitHub environment name when left blank."""
    return env_cfg.infisical_env_name.strip() or env_name
