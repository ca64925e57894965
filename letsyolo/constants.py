from typing import Final


STATE_DIRNAME: Final[str] = ".letsyolo"
SECRETS_FILENAME: Final[str] = "secrets.env"
SETTINGS_FILENAME: Final[str] = "config.json"

SECRETS_FILE_MODE: Final[int] = 0o600
SECRETS_DIR_MODE: Final[int] = 0o700

PROBE_TIMEOUT_SECONDS: Final[float] = 5.0
PROBE_TIMEOUT_ENV: Final[str] = "LETSYOLO_PROBE_TIMEOUT"

GLOBAL_BIN_DIRS: Final[tuple[str, ...]] = (
    "/usr/local/bin",
    "/opt/homebrew/bin",
    "/usr/bin",
)
NVM_VERSIONS_RELPATH: Final[tuple[str, ...]] = (".nvm", "versions", "node")

PROFILE_MARKER: Final[str] = "# letsyolo API keys"
SECRETS_PATH_FRAGMENT: Final[str] = f"{STATE_DIRNAME}/{SECRETS_FILENAME}"
