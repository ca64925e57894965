import logging
import stat
from pathlib import Path

from letsyolo.constants import PROFILE_MARKER, SECRETS_PATH_FRAGMENT
from letsyolo.errors import FilesystemError
from letsyolo.settings import RuntimeContext
from letsyolo.utils import atomic_write_text


logger = logging.getLogger(__name__)


class ShellProfileHook:
    def __init__(self, context: RuntimeContext) -> None:
        self._context = context

    def profiles(self) -> list[Path]:
        home = self._context.home
        if self._context.is_windows:
            documents = home / "Documents"
            return [
                documents / "PowerShell" / "Microsoft.PowerShell_profile.ps1",
                documents / "WindowsPowerShell" / "Microsoft.PowerShell_profile.ps1",
            ]
        return [home / ".zshrc", home / ".bashrc", home / ".bash_profile"]

    def source_line(self) -> str:
        if self._context.is_windows:
            return f'. "{self._context.secrets_file}"'
        return (
            f'[ -f "$HOME/{SECRETS_PATH_FRAGMENT}" ] && '
            f'source "$HOME/{SECRETS_PATH_FRAGMENT}"'
        )

    def is_sourced_in(self, profile: Path) -> bool:
        try:
            content = profile.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return False
        return SECRETS_PATH_FRAGMENT in content.replace("\\", "/")

    def add_source_line(self, profile: Path) -> bool:
        """Append the hook block to ``profile``; False when it is already there."""
        if self.is_sourced_in(profile):
            return False

        # Write through symlinks so dotfile managers keep their link.
        target = profile.resolve()
        content = ""
        mode = 0o644
        if target.exists():
            try:
                content = target.read_text(encoding="utf-8")
                mode = stat.S_IMODE(target.stat().st_mode)
            except (OSError, UnicodeDecodeError) as exc:
                raise FilesystemError(target, str(exc)) from exc

        addition = f"\n{PROFILE_MARKER}\n{self.source_line()}\n"
        atomic_write_text(target, content + addition, mode=mode)
        logger.debug("Hooked secrets file into %s", target)
        return True

    def install(self) -> list[Path]:
        """Hook every profile; returns the profiles that now source the file."""
        hooked: list[Path] = []
        for profile in self.profiles():
            try:
                self.add_source_line(profile)
            except FilesystemError as exc:
                logger.warning("Could not update %s: %s", profile, exc)
                continue
            hooked.append(profile)
        return hooked
