"""Error types shared by providers, workflows, and routes."""


class ValmanError(Exception):
    """Base class for all dashboard errors."""


class ConfigError(ValmanError):
    """Config file missing, unreadable, or lacking a required key."""


class RuntimeApiError(ValmanError):
    """Transport/protocol failure while talking to the container runtime."""


class RuntimeDataError(ValmanError):
    """Container runtime returned a record that is missing expected fields."""


class ContainerNotFoundError(RuntimeDataError):
    """No container with the configured name is known to the runtime."""


class GameQueryError(ValmanError):
    """Game query protocol request failed."""


class FilesystemError(ValmanError):
    """I/O failure while listing backups or extracting an archive."""


class AuthError(ValmanError):
    """Missing or invalid Basic credentials."""


class RestoreError(ValmanError):
    """Restore workflow failure, tagged with the stage that failed."""

    stage = "restore"

    def __init__(self, message, backup_name=""):
        super().__init__(message)
        self.backup_name = backup_name


class BackupError(RestoreError):
    """Archive could not be resolved or extracted; no restart was attempted."""

    stage = "backup"


class RestartError(RestoreError):
    """Archive was extracted but the container restart failed."""

    stage = "restart"
