from letsyolo.toggles.engine import ToggleEngine
from letsyolo.toggles.strategies import (
    TOGGLE_STRATEGIES,
    FlatTomlToggle,
    NestedJsonToggle,
    SessionOnlyToggle,
    ToggleStrategy,
)

__all__ = [
    "FlatTomlToggle",
    "NestedJsonToggle",
    "SessionOnlyToggle",
    "TOGGLE_STRATEGIES",
    "ToggleEngine",
    "ToggleStrategy",
]
