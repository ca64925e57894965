from letsyolo.agents.catalog import (
    AGENT_ALIASES,
    FULL_AUTONOMY_COMMANDS,
    build_agent_catalog,
    parse_agent_type,
)

__all__ = [
    "AGENT_ALIASES",
    "FULL_AUTONOMY_COMMANDS",
    "build_agent_catalog",
    "parse_agent_type",
]
