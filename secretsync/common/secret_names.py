"""Secret name computation.

Naming rule:
- The folder loses its leading "/" and every space, hyphen and "/" becomes "_".
- The key has its spaces and hyphens replaced with "_".
- Both are upper-cased and joined as FOLDER_KEY; the root folder adds no prefix.

Examples:
  - ("My Key", "/frontend")     -> "FRONTEND_MY_KEY"
  - ("My-Key", "/")             -> "MY_KEY"
  - ("token", "/apps/web-ui")   -> "APPS_WEB_UI_TOKEN"

The environment's ``variableName`` template is applied on top of the computed
name (see NameTemplate). In the template "%s" is the computed name and "%%" a
literal "%".
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

PLACEHOLDER = "%s"

# "%%" is a literal percent sign, as in printf
_TOKEN_RE = re.compile(r"%%|%s")


def count_placeholders(pattern: str) -> int:
    return sum(1 for m in _TOKEN_RE.finditer(pattern) if m.group(0) == PLACEHOLDER)


def _underscore(value: str, chars: str) -> str:
    for ch in chars:
        value = value.replace(ch, "_")
    return value


def compute_secret_name(base_key: str, folder_path: str) -> str:
    folder = str(folder_path).lstrip("/")
    base = _underscore(str(base_key), " -")
    folder = _underscore(folder, " -/")

    if not folder:
        return base.upper()
    return f"{folder.upper()}_{base.upper()}"


@dataclass(frozen=True)
class NameTemplate:
    """Either verbatim (pattern is None) or a pattern with at most one placeholder."""

    pattern: Optional[str] = None

    @staticmethod
    def parse(raw: str) -> "NameTemplate":
        s = str(raw)
        if not s.strip():
            return NameTemplate()
        if count_placeholders(s) > 1:
            raise ValueError(f"name template {s!r} has more than one {PLACEHOLDER!r} placeholder")
        return NameTemplate(pattern=s)

    @property
    def is_verbatim(self) -> bool:
        return self.pattern is None

    def apply(self, name: str) -> str:
        if self.pattern is None:
            return name
        return _TOKEN_RE.sub(lambda m: name if m.group(0) == PLACEHOLDER else "%", self.pattern)


def final_secret_name(base_key: str, folder_path: str, template: NameTemplate) -> str:
    """Computed name with the environment template applied, upper-cased as GitHub stores it."""
    return template.apply(compute_secret_name(base_key, folder_path)).upper()
