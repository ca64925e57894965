import logging
import os
from pathlib import Path
from typing import Mapping

from letsyolo.constants import SECRETS_DIR_MODE, SECRETS_FILE_MODE
from letsyolo.errors import FilesystemError
from letsyolo.keys.catalog import API_KEYS, KNOWN_ENV_VARS
from letsyolo.keys.envfile import is_valid_name, parse_env_text, render_env_text
from letsyolo.settings import RuntimeContext
from letsyolo.utils import atomic_write_text


logger = logging.getLogger(__name__)

SECRETS_HEADER = [
    "# letsyolo API keys - sourced by your shell profile",
    "# DO NOT commit this file to version control",
    "",
]


class SecretStore:
    def __init__(self, context: RuntimeContext) -> None:
        self._context = context

    @property
    def path(self) -> Path:
        return self._context.secrets_file

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FilesystemError(self.path, str(exc)) from exc
        return parse_env_text(text)

    def write(self, secrets: Mapping[str, str]) -> None:
        ordered: dict[str, str] = {}
        for key_def in API_KEYS:
            value = secrets.get(key_def.env_var)
            if value:
                ordered[key_def.env_var] = value

        # Entries added to the file by hand survive a rewrite.
        extras = {
            key: value
            for key, value in self.read().items()
            if key not in KNOWN_ENV_VARS
        }
        extras.update(
            (key, value) for key, value in secrets.items() if key not in KNOWN_ENV_VARS
        )
        for key, value in extras.items():
            if not value:
                continue
            if not is_valid_name(key):
                logger.warning("Dropping invalid variable name %r from secrets", key)
                continue
            ordered[key] = value

        atomic_write_text(
            self.path, render_env_text(SECRETS_HEADER, ordered), mode=SECRETS_FILE_MODE
        )
        self.enforce_permissions()
        logger.debug("Saved %d secret(s) to %s", len(ordered), self.path)

    def enforce_permissions(self) -> None:
        if self._context.is_windows:
            return
        try:
            os.chmod(self.path.parent, SECRETS_DIR_MODE)
            if self.path.exists():
                os.chmod(self.path, SECRETS_FILE_MODE)
        except OSError as exc:
            raise FilesystemError(self.path, str(exc)) from exc
