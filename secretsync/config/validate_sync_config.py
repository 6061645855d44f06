from __future__ import annotations

from typing import Any, Dict

import jsonschema

from ..common.secret_names import PLACEHOLDER, count_placeholders
from ..errors import ConfigError


def _string_list() -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}}


def _environment_schema() -> Dict[str, Any]:
    return {
        "type": "object",
        "required": ["infisicalEnvName", "variableName", "folders"],
        "properties": {
            "infisicalEnvName": {"type": "string"},
            "variableName": {"type": "string"},
            "folders": _string_list(),
            "infisicalArgs": _string_list(),
        },
    }


def sync_config_schema() -> Dict[str, Any]:
    return {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "required": ["commonFolders", "environments"],
        "properties": {
            "commonFolders": _string_list(),
            "environments": {
                "type": "object",
                "additionalProperties": _environment_schema(),
            },
            "strict": {"type": "boolean"},
            "clean": {"type": "boolean"},
        },
    }


def _where(err: jsonschema.ValidationError) -> str:
    parts = [str(p) for p in err.absolute_path]
    return ".".join(["sync_config", *parts])


def validate_sync_config(cfg: Any) -> None:
    """Validate a parsed sync config document.

    Raises:
        ConfigError: with the offending path, e.g.
        "Invalid sync_config.environments.staging.folders: 'x' is not of type 'array'".
    """
    if not isinstance(cfg, dict):
        raise ConfigError("Invalid sync_config: expected mapping at top level")

    try:
        jsonschema.validate(instance=cfg, schema=sync_config_schema())
    except jsonschema.ValidationError as e:
        raise ConfigError(f"Invalid {_where(e)}: {e.message}") from e

    for env_key, env_cfg in cfg["environments"].items():
        template = env_cfg["variableName"]
        if count_placeholders(template) > 1:
            raise ConfigError(
                f"Invalid sync_config.environments.{env_key}.variableName: "
                f"{template!r} has more than one {PLACEHOLDER!r} placeholder"
            )
