from enum import Enum

from letsyolo.models import KeyStatusSource


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


KEY_SOURCE_LABEL = {
    KeyStatusSource.ENV: "in env",
    KeyStatusSource.FILE: "in secrets file",
    KeyStatusSource.NONE: "not set",
}
