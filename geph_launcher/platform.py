"""Cross-platform launch strategies.

One HostPlatform is selected at runtime from sys.platform:

- Linux: VPN mode goes through an elevation helper (pkexec) with tun-route
- Windows: VPN mode needs an already-elevated process, uses windivert
- macOS: VPN mode is not available
"""

import os
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import psutil

from .errors import InsufficientPrivilege, UnsupportedPlatform

CONNECT = "connect"
VPN_MODE = "--vpn-mode"

# Windows CREATE_NO_WINDOW
CREATE_NO_WINDOW = 0x08000000


@dataclass(frozen=True)
class LaunchPlan:
    """Resolved executable and arguments for one spawn attempt."""
    executable: str
    args: List[str] = field(default_factory=list)
    elevated_with: Optional[str] = None

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.args]


class HostPlatform:
    """Operating system capabilities the launcher depends on."""

    name = "generic"

    def is_elevated(self) -> bool:
        """Check if running with admin/root privileges."""
        return os.geteuid() == 0

    def popen_kwargs(self) -> dict:
        """Extra keyword arguments for subprocess process creation."""
        return {}

    def normal_plan(self, daemon: str, args: List[str]) -> LaunchPlan:
        return LaunchPlan(executable=daemon, args=[CONNECT, *args])

    def vpn_plan(self, daemon: str, args: List[str], elevator: str) -> LaunchPlan:
        """Plan for VPN mode.

        Raises:
            UnsupportedPlatform: If VPN mode is unavailable here
            InsufficientPrivilege: If VPN mode needs elevation we lack
        """
        raise UnsupportedPlatform(f"VPN mode not supported on {self.name}")


class LinuxPlatform(HostPlatform):
    name = "linux"

    def vpn_plan(self, daemon: str, args: List[str], elevator: str) -> LaunchPlan:
        return LaunchPlan(
            executable=elevator,
            args=[daemon, CONNECT, VPN_MODE, "tun-route", *args],
            elevated_with=elevator,
        )


class WindowsPlatform(HostPlatform):
    name = "windows"

    def is_elevated(self) -> bool:
        try:
            import ctypes
            return ctypes.windll.shell32.IsUserAnAdmin() != 0
        except Exception:
            return False

    def popen_kwargs(self) -> dict:
        return {"creationflags": CREATE_NO_WINDOW}

    def vpn_plan(self, daemon: str, args: List[str], elevator: str) -> LaunchPlan:
        if not self.is_elevated():
            raise InsufficientPrivilege("VPN mode requires admin privileges on Windows")
        return LaunchPlan(executable=daemon, args=[CONNECT, VPN_MODE, "windivert", *args])


class MacOSPlatform(HostPlatform):
    name = "macos"


def detect_platform(sys_platform: Optional[str] = None) -> HostPlatform:
    """Select the HostPlatform for the running (or given) OS."""
    sys_platform = sys_platform or sys.platform
    if sys_platform == "win32":
        return WindowsPlatform()
    elif sys_platform == "darwin":
        return MacOSPlatform()
    elif sys_platform.startswith("linux"):
        return LinuxPlatform()
    return HostPlatform()


# === Process lookup ===

def find_daemon_processes(executable: str) -> List[psutil.Process]:
    """Find running daemon processes by executable name.

    Args:
        executable: Daemon executable name or path (e.g., 'geph4-client')

    Returns:
        Matching processes, possibly empty
    """
    wanted = Path(executable).name
    names = {wanted, f"{wanted}.exe"}
    found = []
    for proc in psutil.process_iter(["name", "pid"]):
        try:
            if proc.info["name"] in names:
                found.append(proc)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    return found


def probe_kwargs(platform: HostPlatform) -> dict:
    """subprocess.run keyword arguments for short helper invocations."""
    kwargs = {"capture_output": True, "text": True, "stdin": subprocess.DEVNULL}
    kwargs.update(platform.popen_kwargs())
    return kwargs
