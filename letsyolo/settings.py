import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

from jsonschema import Draft202012Validator

from letsyolo.config_store import read_object
from letsyolo.constants import (
    PROBE_TIMEOUT_ENV,
    PROBE_TIMEOUT_SECONDS,
    SECRETS_FILENAME,
    SETTINGS_FILENAME,
    STATE_DIRNAME,
)
from letsyolo.errors import InvalidConfigSchemaError


SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "probe_timeout": {"type": "number", "exclusiveMinimum": 0},
        "extra_bin_dirs": {"type": "array", "items": {"type": "string"}},
        "extra_secret_paths": {"type": "array", "items": {"type": "string"}},
    },
    "additionalProperties": False,
}


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


@dataclass(frozen=True)
class RuntimeContext:
    """Process-wide ambient state, passed explicitly into every component."""

    home: Path
    environ: Mapping[str, str] = field(default_factory=dict)
    platform: str = "linux"

    @classmethod
    def from_process(cls) -> "RuntimeContext":
        return cls(home=Path.home(), environ=dict(os.environ), platform=sys.platform)

    @property
    def is_windows(self) -> bool:
        return self.platform == "win32"

    @property
    def state_dir(self) -> Path:
        return self.home / STATE_DIRNAME

    @property
    def secrets_file(self) -> Path:
        return self.state_dir / SECRETS_FILENAME

    @property
    def settings_file(self) -> Path:
        return self.state_dir / SETTINGS_FILENAME


@dataclass(frozen=True)
class Settings:
    probe_timeout: float = PROBE_TIMEOUT_SECONDS
    extra_bin_dirs: tuple[Path, ...] = ()
    extra_secret_paths: tuple[Path, ...] = ()


class SettingsRepository:
    def __init__(self, context: RuntimeContext) -> None:
        self._context = context
        self._validator = Draft202012Validator(SETTINGS_SCHEMA)

    @property
    def config_path(self) -> Path:
        return self._context.settings_file

    def load_payload(self) -> dict[str, Any]:
        payload = read_object(self.config_path)
        error = next(iter(self._validator.iter_errors(payload)), None)
        if error is not None:
            raise InvalidConfigSchemaError(self.config_path, format_schema_error(error))
        return payload

    def load(self) -> Settings:
        payload = self.load_payload()
        probe_timeout = float(payload.get("probe_timeout", PROBE_TIMEOUT_SECONDS))
        override = self._timeout_override()
        if override is not None:
            probe_timeout = override
        return Settings(
            probe_timeout=probe_timeout,
            extra_bin_dirs=tuple(
                self._expand(item) for item in payload.get("extra_bin_dirs", [])
            ),
            extra_secret_paths=tuple(
                self._expand(item) for item in payload.get("extra_secret_paths", [])
            ),
        )

    def _timeout_override(self) -> Optional[float]:
        raw = self._context.environ.get(PROBE_TIMEOUT_ENV)
        if not raw:
            return None
        try:
            value = float(raw)
        except ValueError:
            return None
        return value if value > 0 else None

    def _expand(self, raw: str) -> Path:
        if raw == "~":
            return self._context.home
        if raw.startswith("~/"):
            return self._context.home / raw[2:]
        return Path(raw)
