from pathlib import Path


class LetsYoloError(Exception):
    """Base user-facing application error."""


class UnknownAgentError(LetsYoloError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown agent: {name}")


class NotInstalledError(LetsYoloError):
    def __init__(self, agent: str, install_command: str) -> None:
        self.agent = agent
        self.install_command = install_command
        super().__init__(f"Not installed. Install with: {install_command}")


class UnsupportedOperationError(LetsYoloError):
    def __init__(self, agent: str) -> None:
        self.agent = agent
        super().__init__(f"{agent} does not expose a persistent config file")


class ConfigFileError(LetsYoloError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class ConfigParseError(ConfigFileError):
    def __init__(self, path: Path, detail: str, fmt: str = "JSON") -> None:
        self.detail = detail
        self.format = fmt
        super().__init__(path=path, message=f"Invalid {fmt} ({detail})")


class InvalidConfigSchemaError(ConfigFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class FilesystemError(ConfigFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Filesystem error ({detail})")
