"""Error taxonomy for the daemon launcher."""

from typing import Optional, Sequence


class LauncherError(Exception):
    """Base class for launcher errors."""
    pass


class ConfigError(LauncherError):
    """Caller supplied an invalid daemon configuration."""
    pass


class KeyPersistError(LauncherError):
    """RPC key could not be written to disk (non-fatal)."""
    pass


class UnsupportedPlatform(LauncherError):
    """Requested mode is not available on this operating system."""
    pass


class InsufficientPrivilege(LauncherError):
    """Requested mode needs elevated privileges the process does not hold."""
    pass


class SpawnFailed(LauncherError):
    """The operating system refused to create the daemon process."""

    def __init__(self, message: str, argv: Sequence[str] = (), cause: Optional[BaseException] = None):
        super().__init__(message)
        self.argv = list(argv)
        self.cause = cause


class ProbeError(LauncherError):
    """Daemon version could not be determined."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
