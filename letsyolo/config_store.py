"""Read/write primitives for agent config files.

Two formats are supported: a JSON document whose root is an object, and a
TOML document whose top-level keys are the ones the toggle engine touches.
A missing or empty file reads as ``{}``; a file that exists but does not
parse raises ``ConfigParseError`` so callers never overwrite it with
defaults. Every write goes through ``atomic_write_text``.
"""

import json
from pathlib import Path
from typing import Any

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

import tomli_w

from letsyolo.errors import ConfigParseError, FilesystemError
from letsyolo.utils import atomic_write_text


def _read_text(path: Path, fmt: str) -> str | None:
    try:
        if not path.exists() or path.stat().st_size == 0:
            return None
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigParseError(path, str(exc), fmt=fmt) from exc
    except OSError as exc:
        raise FilesystemError(path, str(exc)) from exc


def read_object(path: Path) -> dict[str, Any]:
    text = _read_text(path, "JSON")
    if text is None or not text.strip():
        return {}
    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise ConfigParseError(path, str(exc), fmt="JSON") from exc
    if not isinstance(payload, dict):
        raise ConfigParseError(path, "expected a JSON object", fmt="JSON")
    return payload


def write_object(path: Path, payload: dict[str, Any]) -> None:
    atomic_write_text(path, json.dumps(payload, indent=2, sort_keys=False) + "\n")


def read_flat(path: Path) -> dict[str, Any]:
    text = _read_text(path, "TOML")
    if text is None:
        return {}
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigParseError(path, str(exc), fmt="TOML") from exc


def write_flat(path: Path, payload: dict[str, Any]) -> None:
    atomic_write_text(path, tomli_w.dumps(payload))
