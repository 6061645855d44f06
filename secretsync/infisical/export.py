from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence

EXPORT_OK = "ok"
EXPORT_EMPTY = "empty"
EXPORT_MALFORMED = "malformed"


@dataclass(frozen=True)
class RawSecret:
    key: str
    value: str


@dataclass(frozen=True)
class ExportResult:
    """Outcome of one folder export.

    status is one of "ok", "empty", "malformed". ``output`` holds the raw CLI
    output for malformed results only, so it can be shown to the operator.
    """

    status: str
    command: str
    secrets: List[RawSecret] = field(default_factory=list)
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.status == EXPORT_OK


def _run(cmd: List[str]) -> subprocess.CompletedProcess:
    # stderr is folded into stdout; infisical reports errors as plain text
    return subprocess.run(
        cmd,
        check=False,
        encoding="utf-8",
        errors="replace",
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    )


def _parse_secrets(data: Any) -> Optional[List[RawSecret]]:
    if not isinstance(data, list):
        return None
    out: List[RawSecret] = []
    for item in data:
        if not isinstance(item, dict) or "key" not in item:
            return None
        value = item.get("value")
        out.append(RawSecret(key=str(item["key"]), value="" if value is None else str(value)))
    return out


class InfisicalExporter:
    """Runs ``infisical export`` for one environment/folder and parses the JSON output."""

    def __init__(
        self,
        *,
        binary: str = "infisical",
        extra_args: Sequence[str] = (),
        run_fn: Optional[Callable[[List[str]], subprocess.CompletedProcess]] = None,
    ):
        self.binary = binary
        self.extra_args = list(extra_args)
        self.run_fn = run_fn if run_fn is not None else _run

    def command(self, environment_name: str, folder_path: str) -> List[str]:
        return [
            self.binary,
            "export",
            f"--env={environment_name}",
            "--format=json",
            f"--path={folder_path}",
            *self.extra_args,
        ]

    def export_folder(self, environment_name: str, folder_path: str) -> ExportResult:
        cmd = self.command(environment_name, folder_path)
        cmd_s = " ".join(cmd)

        try:
            cp = self.run_fn(cmd)
        except OSError as e:
            return ExportResult(status=EXPORT_MALFORMED, command=cmd_s, output=f"failed to start {self.binary}: {e}")
        except UnicodeDecodeError as e:
            return ExportResult(status=EXPORT_MALFORMED, command=cmd_s, output=f"undecodable output from {self.binary}: {e}")

        output = cp.stdout or ""
        try:
            data = json.loads(output)
        except ValueError:
            return ExportResult(status=EXPORT_MALFORMED, command=cmd_s, output=output.strip())

        if data is None or data == {}:
            return ExportResult(status=EXPORT_EMPTY, command=cmd_s)

        secrets = _parse_secrets(data)
        if secrets is None:
            return ExportResult(status=EXPORT_MALFORMED, command=cmd_s, output=output.strip())
        if not secrets:
            return ExportResult(status=EXPORT_EMPTY, command=cmd_s)
        return ExportResult(status=EXPORT_OK, command=cmd_s, secrets=secrets)
