import logging
from pathlib import Path
from typing import Sequence

from letsyolo.keys.catalog import API_KEYS
from letsyolo.keys.envfile import parse_env_text
from letsyolo.keys.store import SecretStore
from letsyolo.models import SecretRecord, SecretSource
from letsyolo.settings import RuntimeContext


logger = logging.getLogger(__name__)

DOTFILE_NAMES: tuple[str, ...] = (
    ".env",
    ".secrets",
    ".env.local",
    ".zshrc",
    ".bashrc",
    ".bash_profile",
    ".profile",
    ".zshenv",
)


class SecretScanner:
    """Finds existing values for the known API keys.

    Sources are ranked: the process environment, then the secrets file, then
    common dotfiles. The first source holding a variable wins. Results are
    only suggestions; nothing here writes to the secrets file.
    """

    def __init__(
        self,
        context: RuntimeContext,
        store: SecretStore,
        extra_paths: Sequence[Path] = (),
    ) -> None:
        self._context = context
        self._store = store
        self._extra_paths = tuple(extra_paths)

    def search_paths(self) -> list[Path]:
        paths = [self._store.path]
        paths.extend(self._context.home / name for name in DOTFILE_NAMES)
        for extra in self._extra_paths:
            if extra not in paths:
                paths.append(extra)
        return paths

    def scan(self) -> dict[str, SecretRecord]:
        wanted = [item.env_var for item in API_KEYS]
        found: dict[str, SecretRecord] = {}

        for env_var in wanted:
            value = self._context.environ.get(env_var)
            if value:
                found[env_var] = SecretRecord(value=value, source=SecretSource.ENVIRONMENT)

        for path in self.search_paths():
            if len(found) == len(wanted):
                break
            values = self._read_candidate(path)
            for env_var in wanted:
                if env_var in found or not values.get(env_var):
                    continue
                source = (
                    SecretSource.SECRETS_FILE
                    if path == self._store.path
                    else SecretSource.SCANNED_FILE
                )
                found[env_var] = SecretRecord(
                    value=values[env_var], source=source, path=path
                )
                logger.debug("Found %s in %s", env_var, path)
        return found

    @staticmethod
    def _read_candidate(path: Path) -> dict[str, str]:
        try:
            if not path.is_file():
                return {}
            return parse_env_text(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Skipping unreadable %s: %s", path, exc)
            return {}
