from letsyolo.keys.catalog import API_KEYS, KNOWN_ENV_VARS, mask_key
from letsyolo.keys.profiles import ShellProfileHook
from letsyolo.keys.scanner import SecretScanner
from letsyolo.keys.setup import SecretSetup
from letsyolo.keys.status import check_api_key_status
from letsyolo.keys.store import SecretStore

__all__ = [
    "API_KEYS",
    "KNOWN_ENV_VARS",
    "SecretScanner",
    "SecretSetup",
    "SecretStore",
    "ShellProfileHook",
    "check_api_key_status",
    "mask_key",
]
