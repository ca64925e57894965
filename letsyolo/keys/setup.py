import logging
from typing import Callable, Optional

from letsyolo.keys.catalog import API_KEYS, mask_key
from letsyolo.keys.scanner import SecretScanner
from letsyolo.keys.store import SecretStore
from letsyolo.models import ApiKeyDefinition, SecretRecord, SecretSource, SetupResult


logger = logging.getLogger(__name__)

Prompt = Callable[[ApiKeyDefinition, Optional[SecretRecord]], str]
Confirm = Callable[[ApiKeyDefinition, SecretRecord], bool]


def describe_suggestion(record: Optional[SecretRecord]) -> str:
    if record is None:
        return ""
    return f"{mask_key(record.value)} from {record.source_label}"


class SecretSetup:
    """Interactive API key setup.

    A typed value is always saved. An empty answer keeps a value that is
    already in the secrets file. Values discovered in the environment or in
    other dotfiles are only written after ``confirm`` accepts them.
    """

    def __init__(
        self,
        store: SecretStore,
        scanner: SecretScanner,
        prompt: Prompt,
        confirm: Confirm,
    ) -> None:
        self._store = store
        self._scanner = scanner
        self._prompt = prompt
        self._confirm = confirm

    def run(self) -> SetupResult:
        secrets = self._store.read()
        suggestions = self._scanner.scan()
        saved: list[str] = []
        kept: list[str] = []
        skipped: list[str] = []

        for key_def in API_KEYS:
            env_var = key_def.env_var
            record = suggestions.get(env_var)
            answer = self._prompt(key_def, record).strip()

            if answer:
                secrets[env_var] = answer
                saved.append(env_var)
            elif record is not None and record.source == SecretSource.SECRETS_FILE:
                kept.append(env_var)
            elif record is not None and self._confirm(key_def, record):
                secrets[env_var] = record.value
                saved.append(env_var)
            elif secrets.get(env_var):
                kept.append(env_var)
            else:
                skipped.append(env_var)

        if saved:
            self._store.write(secrets)
        logger.debug("Setup saved=%s kept=%s skipped=%s", saved, kept, skipped)
        return SetupResult(saved=saved, kept=kept, skipped=skipped)
