"""Basic file IO helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from portaudit.errors import InvalidFileError


def read_text_file(path: Path) -> str:
    """Return the file contents as UTF-8 text."""

    if not path.exists():
        raise InvalidFileError(path, "file does not exist")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidFileError(path, str(exc)) from exc


def read_yaml_file(path: Path) -> Any:
    """Return the parsed YAML document."""

    text = read_text_file(path)
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidFileError(path, f"invalid YAML: {exc}") from exc


def read_json_file(path: Path) -> Any:
    """Return the parsed JSON document."""

    text = read_text_file(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidFileError(path, f"invalid JSON: {exc}") from exc
