from letsyolo.keys.catalog import API_KEYS
from letsyolo.keys.store import SecretStore
from letsyolo.models import ApiKeyStatusRow, KeyStatusSource
from letsyolo.settings import RuntimeContext


def check_api_key_status(
    context: RuntimeContext, store: SecretStore
) -> list[ApiKeyStatusRow]:
    file_secrets = store.read()
    rows: list[ApiKeyStatusRow] = []
    for key_def in API_KEYS:
        if context.environ.get(key_def.env_var):
            source = KeyStatusSource.ENV
        elif file_secrets.get(key_def.env_var):
            source = KeyStatusSource.FILE
        else:
            source = KeyStatusSource.NONE
        rows.append(
            ApiKeyStatusRow(
                env_var=key_def.env_var,
                agent=key_def.agent,
                set=source != KeyStatusSource.NONE,
                source=source,
            )
        )
    return rows
