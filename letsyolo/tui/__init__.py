from letsyolo.tui.renderers import YoloConsoleUI

__all__ = ["YoloConsoleUI"]
