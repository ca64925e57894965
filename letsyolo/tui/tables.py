from pathlib import Path
from typing import Optional, Sequence

from rich.table import Column, Table

from letsyolo.models import AgentDefinition, AgentStatus, ApiKeyStatusRow, ToggleResult
from letsyolo.tui.enums import KEY_SOURCE_LABEL, UIStyle
from letsyolo.utils import compact_home_path


PLACEHOLDER = "-"


def _styled(text: str, style: str) -> str:
    return f"[{style}]{text}[/{style}]"


class DetectionTable:
    @staticmethod
    def agents_table(
        statuses: Sequence[AgentStatus], home: Optional[Path] = None
    ) -> Table:
        table = Table(
            Column(header="Agent", width=18),
            Column(header="Status", width=10),
            Column(header="Version", overflow="ellipsis", max_width=28),
            Column(header="Path", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for status in statuses:
            detection = status.detection
            state = (
                _styled("installed", UIStyle.GREEN.value)
                if detection.installed
                else _styled("missing", UIStyle.RED.value)
            )
            path = (
                compact_home_path(detection.path, home)
                if detection.path
                else PLACEHOLDER
            )
            table.add_row(
                status.definition.display_name,
                state,
                detection.version or PLACEHOLDER,
                _styled(path, UIStyle.DIM.value),
            )
        return table


class ToggleTable:
    @staticmethod
    def results_table(
        results: Sequence[ToggleResult], home: Optional[Path] = None
    ) -> Table:
        table = Table(
            Column(header="Agent", width=16),
            Column(header="Yolo", width=12),
            Column(header="Config", overflow="ellipsis", max_width=36),
            Column(header="CLI flag"),
            Column(header="Detail", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for result in results:
            if not result.success or result.state is None:
                table.add_row(
                    result.display_name,
                    _styled("error", UIStyle.RED.value),
                    PLACEHOLDER,
                    PLACEHOLDER,
                    _styled(result.error or "unknown error", UIStyle.RED.value),
                )
                continue

            state = result.state
            if state.enabled:
                label = _styled("enabled", UIStyle.GREEN.value)
            elif state.session_only:
                label = _styled("session-only", UIStyle.YELLOW.value)
            else:
                label = _styled("disabled", UIStyle.DIM.value)
            config = (
                compact_home_path(state.config_path, home)
                if state.config_path is not None
                else "(none)"
            )
            table.add_row(
                result.display_name,
                label,
                config,
                _styled(state.cli_flag, UIStyle.CYAN.value),
                state.details,
            )
        return table


class KeysTable:
    @staticmethod
    def status_table(rows: Sequence[ApiKeyStatusRow]) -> Table:
        table = Table(
            Column(header="Variable", width=20),
            Column(header="Agent", width=16),
            Column(header="Status", width=8),
            Column(header="Source"),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            state = (
                _styled("set", UIStyle.GREEN.value)
                if row.set
                else _styled("missing", UIStyle.RED.value)
            )
            table.add_row(
                row.env_var,
                row.agent,
                state,
                _styled(KEY_SOURCE_LABEL[row.source], UIStyle.DIM.value),
            )
        return table


class FlagsTable:
    @staticmethod
    def flags_table(definitions: Sequence[AgentDefinition]) -> Table:
        table = Table(
            Column(header="Agent", width=18),
            Column(header="Per-session command"),
            Column(header="Persistent", width=10),
            expand=True,
            header_style="bold",
        )
        for definition in definitions:
            table.add_row(
                definition.display_name,
                _styled(definition.launch_command, UIStyle.CYAN.value),
                "yes" if definition.persistent_toggle else "no",
            )
        return table
