import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from letsyolo.config_store import read_flat, read_object, write_flat, write_object
from letsyolo.models import AgentDefinition, AgentType, ToggleState


logger = logging.getLogger(__name__)


class ToggleStrategy(Protocol):
    def read(self, definition: AgentDefinition) -> ToggleState: ...

    def enable(self, definition: AgentDefinition) -> ToggleState: ...

    def disable(self, definition: AgentDefinition) -> ToggleState: ...


def _format_assignment(key: str, value: str) -> str:
    return f'{key} = "{value}"'


@dataclass(frozen=True)
class NestedJsonToggle:
    """Autonomy stored as one sentinel string at a dotted path in a JSON object."""

    key_path: tuple[str, ...]
    sentinel: str
    default_details: str

    @property
    def dotted_key(self) -> str:
        return ".".join(self.key_path)

    def is_enabled(self, config: Mapping[str, Any]) -> bool:
        current: Any = config
        for part in self.key_path:
            if not isinstance(current, dict) or part not in current:
                return False
            current = current[part]
        return current == self.sentinel

    def read(self, definition: AgentDefinition) -> ToggleState:
        config = read_object(definition.require_config_path())
        enabled = self.is_enabled(config)
        details = (
            _format_assignment(self.dotted_key, self.sentinel)
            if enabled
            else self.default_details
        )
        return self._state(definition, enabled=enabled, details=details)

    def enable(self, definition: AgentDefinition) -> ToggleState:
        path = definition.require_config_path()
        config = read_object(path)
        if not self.is_enabled(config):
            parent = config
            for part in self.key_path[:-1]:
                child = parent.get(part)
                if not isinstance(child, dict):
                    child = {}
                    parent[part] = child
                parent = child
            parent[self.key_path[-1]] = self.sentinel
            write_object(path, config)
            logger.debug("Enabled %s in %s", self.dotted_key, path)
        return self._state(
            definition,
            enabled=True,
            details=f"Set {_format_assignment(self.dotted_key, self.sentinel)}",
        )

    def disable(self, definition: AgentDefinition) -> ToggleState:
        path = definition.require_config_path()
        config = read_object(path)
        if not self.is_enabled(config):
            return self._state(
                definition,
                enabled=False,
                details=f"Already disabled (no {self.sentinel} found)",
            )

        parents: list[dict[str, Any]] = [config]
        for part in self.key_path[:-1]:
            parents.append(parents[-1][part])
        del parents[-1][self.key_path[-1]]
        # Prune parent objects emptied by the removal, innermost first.
        for depth in range(len(self.key_path) - 1, 0, -1):
            if parents[depth]:
                break
            del parents[depth - 1][self.key_path[depth - 1]]

        write_object(path, config)
        logger.debug("Removed %s from %s", self.dotted_key, path)
        return self._state(definition, enabled=False, details=f"Removed {self.dotted_key}")

    @staticmethod
    def _state(definition: AgentDefinition, enabled: bool, details: str) -> ToggleState:
        return ToggleState(
            enabled=enabled,
            session_only=False,
            cli_flag=definition.cli_flag,
            details=details,
            config_path=definition.config_path,
        )


@dataclass(frozen=True)
class FlatTomlToggle:
    """Autonomy stored as several independent top-level sentinel keys."""

    sentinels: tuple[tuple[str, str], ...]
    default_details: str

    @property
    def assignments(self) -> str:
        return ", ".join(_format_assignment(key, value) for key, value in self.sentinels)

    def is_enabled(self, config: Mapping[str, Any]) -> bool:
        return all(config.get(key) == value for key, value in self.sentinels)

    def read(self, definition: AgentDefinition) -> ToggleState:
        config = read_flat(definition.require_config_path())
        enabled = self.is_enabled(config)
        details = self.assignments if enabled else self.default_details
        return self._state(definition, enabled=enabled, details=details)

    def enable(self, definition: AgentDefinition) -> ToggleState:
        path = definition.require_config_path()
        config = read_flat(path)
        if not self.is_enabled(config):
            for key, value in self.sentinels:
                config[key] = value
            write_flat(path, config)
            logger.debug("Enabled %s in %s", self.assignments, path)
        return self._state(definition, enabled=True, details=f"Set {self.assignments}")

    def disable(self, definition: AgentDefinition) -> ToggleState:
        path = definition.require_config_path()
        config = read_flat(path)
        removed = [key for key, value in self.sentinels if config.get(key) == value]
        if not removed:
            return self._state(
                definition,
                enabled=False,
                details="Already disabled (no yolo settings found)",
            )

        for key in removed:
            del config[key]
        write_flat(path, config)
        logger.debug("Removed %s from %s", ", ".join(removed), path)
        return self._state(
            definition,
            enabled=False,
            details=f"Removed {' and '.join(removed)} overrides",
        )

    @staticmethod
    def _state(definition: AgentDefinition, enabled: bool, details: str) -> ToggleState:
        return ToggleState(
            enabled=enabled,
            session_only=False,
            cli_flag=definition.cli_flag,
            details=details,
            config_path=definition.config_path,
        )


@dataclass(frozen=True)
class SessionOnlyToggle:
    """Agents whose autonomy exists only as a per-invocation flag."""

    enable_details: str
    disable_details: str
    status_details: str

    def read(self, definition: AgentDefinition) -> ToggleState:
        return self._state(definition, self.status_details)

    def enable(self, definition: AgentDefinition) -> ToggleState:
        return self._state(definition, self.enable_details)

    def disable(self, definition: AgentDefinition) -> ToggleState:
        return self._state(definition, self.disable_details)

    @staticmethod
    def _state(definition: AgentDefinition, details: str) -> ToggleState:
        return ToggleState(
            enabled=False,
            session_only=True,
            cli_flag=definition.cli_flag,
            details=details,
            config_path=None,
        )


TOGGLE_STRATEGIES: dict[AgentType, ToggleStrategy] = {
    AgentType.CLAUDE_CODE: NestedJsonToggle(
        key_path=("permissions", "defaultMode"),
        sentinel="bypassPermissions",
        default_details="Default permissions",
    ),
    AgentType.CODEX: FlatTomlToggle(
        sentinels=(
            ("approval_policy", "never"),
            ("sandbox_mode", "danger-full-access"),
        ),
        default_details="Default approval policy",
    ),
    AgentType.COPILOT: SessionOnlyToggle(
        enable_details=(
            "No persistent yolo toggle exists for GitHub Copilot. "
            "Use `copilot --yolo` per-session."
        ),
        disable_details=(
            "No persistent yolo toggle to disable. Stop using `copilot --yolo` flag."
        ),
        status_details="No persistent yolo toggle (use --yolo flag)",
    ),
    AgentType.AMPLIFIER: SessionOnlyToggle(
        enable_details=(
            "No persistent yolo toggle exists for Amplifier. "
            "Use `amp --dangerously-allow-all` per-session."
        ),
        disable_details="No persistent yolo toggle to disable for Amplifier.",
        status_details="No persistent yolo toggle (use --dangerously-allow-all flag)",
    ),
}
