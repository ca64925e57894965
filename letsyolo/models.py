from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from letsyolo.errors import UnsupportedOperationError


class AgentType(str, Enum):
    CLAUDE_CODE = "claude-code"
    CODEX = "codex"
    COPILOT = "copilot"
    AMPLIFIER = "amplifier"


class ConfigFormat(str, Enum):
    JSON = "json"
    TOML = "toml"
    NONE = "none"


class SecretSource(str, Enum):
    ENVIRONMENT = "environment"
    SECRETS_FILE = "secrets-file"
    SCANNED_FILE = "scanned-file"


class KeyStatusSource(str, Enum):
    ENV = "env"
    FILE = "file"
    NONE = "none"


@dataclass(frozen=True)
class AgentDefinition:
    type: AgentType
    display_name: str
    binaries: tuple[str, ...]
    version_flag: str
    install_command: str
    cli_flag: str
    launch_command: str
    config_format: ConfigFormat
    config_path: Optional[Path] = None

    def __post_init__(self) -> None:
        has_path = self.config_path is not None
        has_format = self.config_format != ConfigFormat.NONE
        if has_path != has_format:
            raise ValueError(
                f"{self.type.value}: config path and config format must be set together"
            )

    @property
    def persistent_toggle(self) -> bool:
        return self.config_path is not None

    def require_config_path(self) -> Path:
        if self.config_path is None:
            raise UnsupportedOperationError(self.display_name)
        return self.config_path


@dataclass(frozen=True)
class DetectionResult:
    installed: bool
    path: Optional[str] = None
    version: Optional[str] = None

    @classmethod
    def missing(cls) -> "DetectionResult":
        return cls(installed=False)


@dataclass(frozen=True)
class AgentStatus:
    definition: AgentDefinition
    detection: DetectionResult


@dataclass(frozen=True)
class ToggleState:
    enabled: bool
    session_only: bool
    cli_flag: str
    details: str
    config_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.session_only and self.enabled:
            raise ValueError("a session-only toggle can never be enabled")


@dataclass(frozen=True)
class ToggleResult:
    type: AgentType
    display_name: str
    success: bool
    state: Optional[ToggleState] = None
    error: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return self.success and self.state is not None and self.state.enabled


@dataclass(frozen=True)
class ApiKeyDefinition:
    env_var: str
    display_name: str
    agent: str
    hint: str


@dataclass(frozen=True)
class SecretRecord:
    value: str
    source: SecretSource
    path: Optional[Path] = None

    @property
    def source_label(self) -> str:
        if self.source == SecretSource.SCANNED_FILE and self.path is not None:
            return str(self.path)
        return self.source.value


@dataclass(frozen=True)
class ApiKeyStatusRow:
    env_var: str
    agent: str
    set: bool
    source: KeyStatusSource


@dataclass(frozen=True)
class SetupResult:
    saved: list[str]
    kept: list[str]
    skipped: list[str]
