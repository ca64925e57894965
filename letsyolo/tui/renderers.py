from pathlib import Path
from typing import Mapping, Optional, Sequence

from rich.console import Console

from letsyolo.agents.catalog import FULL_AUTONOMY_COMMANDS
from letsyolo.models import (
    AgentDefinition,
    AgentStatus,
    AgentType,
    ApiKeyStatusRow,
    SetupResult,
    ToggleResult,
)
from letsyolo.tui.enums import UIStyle
from letsyolo.tui.sections import UISection
from letsyolo.tui.tables import DetectionTable, FlagsTable, KeysTable, ToggleTable
from letsyolo.utils import compact_home_path


class YoloConsoleUI:
    def __init__(self, console: Console | None = None, home: Optional[Path] = None) -> None:
        self.console = console or Console()
        self.home = home

    def render_detection(self, statuses: Sequence[AgentStatus]) -> None:
        installed = sum(1 for item in statuses if item.detection.installed)
        self.console.print(
            UISection.wrap(
                "detected agents",
                DetectionTable.agents_table(statuses, self.home),
                style=UIStyle.BLUE.value,
                subtitle=f"{installed}/{len(statuses)} installed",
            )
        )

    def render_toggle_results(self, results: Sequence[ToggleResult], action: str) -> None:
        style = UIStyle.CYAN.value
        if any(not item.success for item in results):
            style = UIStyle.RED.value
        self.console.print(
            UISection.wrap(
                f"yolo mode - {action}",
                ToggleTable.results_table(results, self.home),
                style=style,
            )
        )

    def render_ready_to_run(
        self,
        results: Sequence[ToggleResult],
        catalog: Mapping[AgentType, AgentDefinition],
    ) -> None:
        commands = [catalog[item.type].launch_command for item in results if item.enabled]
        if not commands:
            return
        body = "\n".join(f"[cyan]{command}[/cyan]" for command in commands)
        self.console.print(
            UISection.note("ready to go! run any of these", body, style=UIStyle.GREEN.value)
        )

    def render_key_status(self, rows: Sequence[ApiKeyStatusRow], secrets_path: Path) -> None:
        self.console.print(
            UISection.wrap(
                "api keys",
                KeysTable.status_table(rows),
                style=UIStyle.BLUE.value,
                subtitle=f"secrets file: {compact_home_path(secrets_path, self.home)}",
            )
        )

    def render_flags(self, definitions: Sequence[AgentDefinition]) -> None:
        self.console.print(
            UISection.wrap(
                "recommended cli flags (per-session)",
                FlagsTable.flags_table(definitions),
                style=UIStyle.BLUE.value,
            )
        )
        body = "\n".join(f"[cyan]{command}[/cyan]" for command in FULL_AUTONOMY_COMMANDS)
        self.console.print(
            UISection.note("full autonomous launch commands", body, style=UIStyle.CYAN.value)
        )
        self.console.print(
            UISection.note(
                "warning",
                "All bypass modes are for trusted/sandboxed environments only.",
                style=UIStyle.YELLOW.value,
            )
        )

    def render_setup_intro(self) -> None:
        self.console.print(
            UISection.note(
                "api key setup",
                "Enter your API keys below. Press Enter to skip a key or keep "
                "its current value.",
                style=UIStyle.BLUE.value,
            )
        )

    def render_setup_result(
        self, result: SetupResult, secrets_path: Path, hooked: Sequence[Path]
    ) -> None:
        secrets_display = compact_home_path(secrets_path, self.home)
        lines: list[str] = []
        if result.saved:
            lines.append(
                f"[green]Saved {len(result.saved)} key(s)[/green] to {secrets_display} "
                "(permissions 600, owner read/write only)"
            )
        if result.kept:
            lines.append(f"Kept: {', '.join(result.kept)}")
        if result.skipped:
            lines.append(f"[dim]Skipped: {', '.join(result.skipped)}[/dim]")
        if not lines:
            lines.append("Nothing to save.")
        self.console.print(
            UISection.note("setup", "\n".join(lines), style=UIStyle.GREEN.value)
        )

        if not result.saved:
            return
        if hooked:
            profiles = "\n".join(
                f"- {compact_home_path(item, self.home)}" for item in hooked
            )
            self.console.print(
                UISection.note(
                    "shell profiles configured", profiles, style=UIStyle.GREEN.value
                )
            )
        self.console.print(
            UISection.note(
                "next",
                "Activate now by running this in your terminal:\n"
                f"[cyan]source {secrets_path}[/cyan]\n"
                "Or open a new terminal tab; it will load automatically.",
                style=UIStyle.DIM.value,
            )
        )
