import logging
import re
from pathlib import Path
from typing import Sequence

from letsyolo.constants import GLOBAL_BIN_DIRS, NVM_VERSIONS_RELPATH
from letsyolo.settings import RuntimeContext


logger = logging.getLogger(__name__)

NVM_VERSION_PATTERN = re.compile(r"^v\d+(\.\d+)*$")


class BinaryLocator:
    """Builds the candidate list tried when probing for an agent binary.

    PATH lookup comes first through the bare name. Global install prefixes
    and nvm-managed node versions follow, since cron jobs, launchd and GUI
    shells often run with a PATH that lacks them.
    """

    def __init__(
        self, context: RuntimeContext, extra_bin_dirs: Sequence[Path] = ()
    ) -> None:
        self._context = context
        self._extra_bin_dirs = tuple(extra_bin_dirs)

    @property
    def nvm_versions_dir(self) -> Path:
        return self._context.home.joinpath(*NVM_VERSIONS_RELPATH)

    def candidates(self, binary_name: str) -> list[str]:
        candidates: list[str] = [binary_name]
        if self._context.is_windows:
            return candidates

        bin_dirs = [Path(item) for item in GLOBAL_BIN_DIRS]
        bin_dirs.append(self._context.home / ".local" / "bin")
        bin_dirs.extend(self._extra_bin_dirs)
        bin_dirs.extend(self._nvm_bin_dirs())

        for bin_dir in bin_dirs:
            candidate = str(bin_dir / binary_name)
            if candidate not in candidates:
                candidates.append(candidate)
        return candidates

    def _nvm_bin_dirs(self) -> list[Path]:
        try:
            entries = sorted(item.name for item in self.nvm_versions_dir.iterdir())
        except OSError:
            return []
        bin_dirs = []
        for entry in entries:
            if not NVM_VERSION_PATTERN.match(entry):
                logger.debug("Skipping nvm entry %s", entry)
                continue
            bin_dirs.append(self.nvm_versions_dir / entry / "bin")
        return bin_dirs
