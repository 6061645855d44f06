from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..common.secret_names import NameTemplate
from ..errors import ConfigError
from ..utils.yamlio import read_yaml
from .validate_sync_config import validate_sync_config


@dataclass(frozen=True)
class EnvironmentConfig:
    infisical_env_name: str
    variable_name: NameTemplate
    folders: List[str]
    infisical_args: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SyncConfig:
    common_folders: List[str]
    environments: Dict[str, EnvironmentConfig]
    strict: bool = False
    clean: bool = False


def _build(data: Dict[str, Any]) -> SyncConfig:
    environments: Dict[str, EnvironmentConfig] = {}
    for env_key, raw in data["environments"].items():
        environments[str(env_key)] = EnvironmentConfig(
            infisical_env_name=raw["infisicalEnvName"],
            variable_name=NameTemplate.parse(raw["variableName"]),
            folders=list(raw["folders"]),
            infisical_args=list(raw.get("infisicalArgs") or []),
        )
    return SyncConfig(
        common_folders=list(data["commonFolders"]),
        environments=environments,
        strict=bool(data.get("strict", False)),
        clean=bool(data.get("clean", False)),
    )


def load_sync_config(path: str | Path) -> SyncConfig:
    """Load and validate a sync config file (YAML or JSON).

    Contract:
    - Missing keys and wrong types fail fast; unknown keys are ignored.
    - ``strict`` and ``clean`` default to false when absent.
    - No side effects beyond reading the file.

    Raises:
        ConfigError: if the file is missing, unparsable or invalid.
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Sync config file not found: {p}")

    try:
        data = read_yaml(p)
    except yaml.YAMLError as e:
        raise ConfigError(f"Sync config is not valid YAML/JSON: {p}: {e}") from e

    validate_sync_config(data)
    return _build(data)
