"""Process environment inputs.

The tool runs as a GitHub Actions step. Inputs come from the step environment,
with CLI flags taking precedence:

- INPUT_CONFIG_PATH      path to the sync config (action input ``config_path``)
- TARGET_ENVIRONMENT     GitHub environment to sync into
- GITHUB_REPOSITORY      "owner/repo" (provided by Actions)
- GITHUB_REPOSITORY_ID   numeric repository id (provided by Actions)
- REST_GITHUB_TOKEN      token allowed to manage environment secrets
                         (GITHUB_TOKEN is used when unset)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..errors import ConfigError

CONFIG_PATH_ENV = "INPUT_CONFIG_PATH"
TARGET_ENVIRONMENT_ENV = "TARGET_ENVIRONMENT"
TOKEN_ENV_VARS = ("REST_GITHUB_TOKEN", "GITHUB_TOKEN")


def _get(env: Mapping[str, str], name: str) -> str:
    return str(env.get(name, "") or "").strip()


@dataclass(frozen=True)
class RuntimeSettings:
    config_path: str
    target_environment: str
    repository: str
    repository_id: str
    token: str

    @property
    def repository_name(self) -> str:
        return self.repository.split("/", 1)[1]


def config_path_from_env(cli_path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> str:
    """Resolve the config path. Precedence: CLI flag, then INPUT_CONFIG_PATH."""
    env_map = env if env is not None else os.environ
    if cli_path and str(cli_path).strip():
        return str(cli_path).strip()
    path = _get(env_map, CONFIG_PATH_ENV)
    if not path:
        raise ConfigError(f"No sync config path given (use --config or set {CONFIG_PATH_ENV})")
    return path


def target_environment_from_env(cli_env: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> str:
    """Resolve the target environment name. Returns "" when neither source is set."""
    env_map = env if env is not None else os.environ
    if cli_env and str(cli_env).strip():
        return str(cli_env).strip()
    return _get(env_map, TARGET_ENVIRONMENT_ENV)


def load_runtime_settings(
    *,
    config_path: str,
    target_environment: str,
    env: Optional[Mapping[str, str]] = None,
) -> RuntimeSettings:
    """Collect repository identity and token from the environment.

    Raises:
        ConfigError: if GITHUB_REPOSITORY, GITHUB_REPOSITORY_ID or a token is missing.
    """
    env_map = env if env is not None else os.environ

    repository = _get(env_map, "GITHUB_REPOSITORY")
    if "/" not in repository or not repository.split("/", 1)[1]:
        raise ConfigError(f"GITHUB_REPOSITORY must be set as 'owner/repo' (got {repository!r})")

    repository_id = _get(env_map, "GITHUB_REPOSITORY_ID")
    if not repository_id:
        raise ConfigError("GITHUB_REPOSITORY_ID env variable is not set")

    token = ""
    for name in TOKEN_ENV_VARS:
        token = _get(env_map, name)
        if token:
            break
    if not token:
        raise ConfigError(f"Missing GitHub token in env var {TOKEN_ENV_VARS[0]} (or {TOKEN_ENV_VARS[1]})")

    return RuntimeSettings(
        config_path=config_path,
        target_environment=target_environment,
        repository=repository,
        repository_id=repository_id,
        token=token,
    )
