from pathlib import Path
from typing import Final

from letsyolo.errors import UnknownAgentError
from letsyolo.models import AgentDefinition, AgentType, ConfigFormat


AGENT_ALIASES: Final[dict[str, AgentType]] = {
    "claude": AgentType.CLAUDE_CODE,
    "claude-code": AgentType.CLAUDE_CODE,
    "claudecode": AgentType.CLAUDE_CODE,
    "codex": AgentType.CODEX,
    "copilot": AgentType.COPILOT,
    "github-copilot": AgentType.COPILOT,
    "amp": AgentType.AMPLIFIER,
    "amplifier": AgentType.AMPLIFIER,
}


def build_agent_catalog(home: Path) -> dict[AgentType, AgentDefinition]:
    return {
        AgentType.CLAUDE_CODE: AgentDefinition(
            type=AgentType.CLAUDE_CODE,
            display_name="Claude Code",
            binaries=("claude",),
            version_flag="--version",
            install_command="npm install -g @anthropic-ai/claude-code",
            cli_flag="--dangerously-skip-permissions",
            launch_command="claude --dangerously-skip-permissions",
            config_format=ConfigFormat.JSON,
            config_path=home / ".claude" / "settings.json",
        ),
        AgentType.CODEX: AgentDefinition(
            type=AgentType.CODEX,
            display_name="Codex",
            binaries=("codex",),
            version_flag="--version",
            install_command="npm install -g @openai/codex",
            cli_flag="--yolo",
            launch_command="codex --yolo",
            config_format=ConfigFormat.TOML,
            config_path=home / ".codex" / "config.toml",
        ),
        AgentType.COPILOT: AgentDefinition(
            type=AgentType.COPILOT,
            display_name="GitHub Copilot",
            binaries=("copilot",),
            version_flag="--version",
            install_command="npm install -g @github/copilot",
            cli_flag="--yolo",
            launch_command="copilot --yolo",
            config_format=ConfigFormat.NONE,
        ),
        AgentType.AMPLIFIER: AgentDefinition(
            type=AgentType.AMPLIFIER,
            display_name="Amplifier",
            binaries=("amplifier", "amp"),
            version_flag="--version",
            install_command="npm install -g amplifier",
            cli_flag="--dangerously-allow-all",
            launch_command="amp --dangerously-allow-all",
            config_format=ConfigFormat.NONE,
        ),
    }


def parse_agent_type(name: str) -> AgentType:
    normalized = name.strip().lower()
    agent_type = AGENT_ALIASES.get(normalized)
    if agent_type is None:
        raise UnknownAgentError(name)
    return agent_type


# Launch commands shown by `letsyolo flags`.
FULL_AUTONOMY_COMMANDS: Final[tuple[str, ...]] = (
    'claude --dangerously-skip-permissions -p "your prompt"',
    "codex --sandbox danger-full-access --ask-for-approval never",
    "copilot --autopilot --yolo --no-ask-user",
    'amp --dangerously-allow-all -x "your prompt"',
)
