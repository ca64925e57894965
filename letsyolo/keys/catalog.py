from typing import Final

from letsyolo.models import ApiKeyDefinition


API_KEYS: Final[tuple[ApiKeyDefinition, ...]] = (
    ApiKeyDefinition(
        env_var="ANTHROPIC_API_KEY",
        display_name="Anthropic API Key",
        agent="Claude Code",
        hint="https://console.anthropic.com/settings/keys",
    ),
    ApiKeyDefinition(
        env_var="OPENAI_API_KEY",
        display_name="OpenAI API Key",
        agent="Codex",
        hint="https://platform.openai.com/api-keys",
    ),
    ApiKeyDefinition(
        env_var="GITHUB_TOKEN",
        display_name="GitHub Token",
        agent="GitHub Copilot",
        hint="https://github.com/settings/tokens (or use `gh auth login`)",
    ),
    ApiKeyDefinition(
        env_var="SRC_ACCESS_TOKEN",
        display_name="Sourcegraph Access Token",
        agent="Amplifier",
        hint="https://sourcegraph.com/user/settings/tokens",
    ),
)

KNOWN_ENV_VARS: Final[frozenset[str]] = frozenset(item.env_var for item in API_KEYS)

FULL_MASK: Final[str] = "****"
MASK_VISIBLE_MIN_LENGTH: Final[int] = 13


def mask_key(value: str) -> str:
    if len(value) < MASK_VISIBLE_MIN_LENGTH:
        return FULL_MASK
    return f"{value[:8]}...{value[-4:]}"
