"""Console logging for the CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; the
handler is installed once here when the command line starts.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("letsyolo")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
