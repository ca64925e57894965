import logging
import os
import shutil
import subprocess
from typing import Callable, Mapping, Optional, Sequence

from letsyolo.constants import PROBE_TIMEOUT_SECONDS
from letsyolo.detection.locator import BinaryLocator
from letsyolo.models import DetectionResult


logger = logging.getLogger(__name__)

Runner = Callable[[list[str], float], subprocess.CompletedProcess]


def run_command(args: list[str], timeout: float) -> subprocess.CompletedProcess:
    return subprocess.run(
        args,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        errors="replace",
        timeout=timeout,
        check=False,
    )


def first_output_line(stdout: Optional[str], stderr: Optional[str]) -> Optional[str]:
    combined = f"{stdout or ''}\n{stderr or ''}"
    for line in combined.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return None


class VersionProbe:
    def __init__(
        self,
        locator: BinaryLocator,
        timeout: float = PROBE_TIMEOUT_SECONDS,
        runner: Runner = run_command,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._locator = locator
        self._timeout = timeout
        self._runner = runner
        self._environ = environ

    def probe(self, binaries: Sequence[str], version_flag: str) -> DetectionResult:
        for binary in binaries:
            for candidate in self._locator.candidates(binary):
                version = self._try_candidate(candidate, version_flag)
                if version is None:
                    continue
                return DetectionResult(
                    installed=True,
                    path=self._resolve_path(candidate),
                    version=version or None,
                )
        return DetectionResult.missing()

    def _try_candidate(self, candidate: str, version_flag: str) -> Optional[str]:
        """Return the version line ("" when silent) or None when the run failed."""
        try:
            completed = self._runner([candidate, version_flag], self._timeout)
        except subprocess.TimeoutExpired:
            logger.debug("Probe timed out after %ss: %s", self._timeout, candidate)
            return None
        except OSError as exc:
            logger.debug("Probe could not spawn %s: %s", candidate, exc)
            return None

        line = first_output_line(completed.stdout, completed.stderr)
        if completed.returncode != 0 and line is None:
            logger.debug(
                "Probe exited %s without output: %s", completed.returncode, candidate
            )
            return None
        logger.debug("Probe hit %s -> %r", candidate, line)
        return line or ""

    def _resolve_path(self, candidate: str) -> str:
        if os.path.isabs(candidate):
            return candidate
        search_path = self._environ.get("PATH") if self._environ is not None else None
        try:
            resolved = shutil.which(candidate, path=search_path)
        except OSError:
            resolved = None
        return resolved or candidate
