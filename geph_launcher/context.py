"""Launcher context: platform, executable paths and once-computed values."""

import os
import threading
from typing import Optional

from .once import OnceCell
from .platform import HostPlatform, detect_platform
from .rpc_key import RpcKeyStore
from .version import probe_version

DAEMON_ENV = "GEPH_LAUNCHER_DAEMON"
ELEVATOR_ENV = "GEPH_LAUNCHER_ELEVATOR"

DEFAULT_DAEMON = "geph4-client"
DEFAULT_ELEVATOR = "pkexec"


class LauncherContext:
    """Everything a launch needs besides the daemon configuration.

    Passed explicitly to the launcher and version probe; the RPC key and
    daemon version are cached here rather than in module globals.
    """

    def __init__(
            self,
            platform: Optional[HostPlatform] = None,
            daemon_path: str = DEFAULT_DAEMON,
            elevator: str = DEFAULT_ELEVATOR,
            key_store: Optional[RpcKeyStore] = None,
    ):
        self.platform = platform or detect_platform()
        self.daemon_path = daemon_path
        self.elevator = elevator
        self.key_store = key_store or RpcKeyStore()
        self._version: OnceCell[str] = OnceCell()

    @classmethod
    def from_env(cls) -> "LauncherContext":
        """Context configured from environment variables."""
        return cls(
            daemon_path=os.environ.get(DAEMON_ENV) or DEFAULT_DAEMON,
            elevator=os.environ.get(ELEVATOR_ENV) or DEFAULT_ELEVATOR,
        )

    def rpc_key(self) -> str:
        """RPC key for this process, loaded or generated on first use."""
        return self.key_store.ensure()

    def daemon_version(self) -> str:
        """Daemon version, probed on first successful call.

        Raises:
            ProbeError: If the daemon cannot be queried
        """
        return self._version.get_or_init(lambda: probe_version(self.daemon_path, self.platform))


# Singleton instance
_context_instance: Optional[LauncherContext] = None
_context_lock = threading.Lock()


def get_context() -> LauncherContext:
    """Get the process-wide default context."""
    global _context_instance
    with _context_lock:
        if _context_instance is None:
            _context_instance = LauncherContext.from_env()
    return _context_instance
