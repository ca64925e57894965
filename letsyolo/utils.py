import contextlib
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from letsyolo.errors import FilesystemError


logger = logging.getLogger(__name__)


def atomic_write_text(path: Path, content: str, mode: Optional[int] = None) -> None:
    """Write ``content`` to ``path`` through a sibling temp file and a rename.

    Readers never observe a partially written file. The temp file is removed
    when anything fails before the rename.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
    except OSError as exc:
        raise FilesystemError(path, str(exc)) from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if mode is not None:
            os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except OSError as exc:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise FilesystemError(path, str(exc)) from exc

    logger.debug("Wrote %s (%d bytes)", path, len(content))


def compact_home_path(path: str | Path, home: Optional[Path] = None) -> str:
    text = str(path)
    home_text = str(home or Path.home())
    if text == home_text:
        return "~"
    home_prefix = f"{home_text}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text

