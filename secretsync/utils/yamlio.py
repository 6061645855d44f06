from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def read_yaml(path: Path) -> Any:
    """Parse a YAML (or JSON) document. Returns None for an empty file."""
    with Path(path).open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)
