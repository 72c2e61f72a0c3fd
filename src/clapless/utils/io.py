"""File I/O utilities: atomic writes, YAML config and JSON reports."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

_yaml = YAML(typ="safe")


def write_atomic(path: Path | str, text: str) -> None:
    """Write text to a file atomically (write to temp, then rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        suffix=path.suffix,
        delete=False,
    ) as tmp:
        tmp.write(text)
        tmp_path = Path(tmp.name)

    tmp_path.replace(path)


def read_yaml(path: Path | str) -> dict:
    """Read a YAML mapping; an empty file yields an empty dict."""
    path = Path(path)
    with open(path) as f:
        data = _yaml.load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return dict(data)


def write_json(path: Path | str, data: Any) -> None:
    """Write data to a JSON file atomically."""
    write_atomic(path, json.dumps(data, indent=2, default=str) + "\n")


def read_json(path: Path | str) -> Any:
    with open(path) as f:
        return json.load(f)
