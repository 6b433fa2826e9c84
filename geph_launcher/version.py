"""Daemon version probe."""

import logging
import subprocess

from .errors import ProbeError
from .platform import HostPlatform, probe_kwargs

log = logging.getLogger(__name__)

VERSION_FLAG = "--version"
PRODUCT_NAME = "geph4-client"
PROBE_TIMEOUT = 10.0


def parse_version(output: str) -> str:
    """Strip the product name and whitespace from --version output."""
    return output.replace(PRODUCT_NAME, "").strip()


def probe_version(executable: str, platform: HostPlatform) -> str:
    """Run the daemon with --version and return the version string.

    Args:
        executable: Daemon executable
        platform: Host platform (for process creation flags)

    Returns:
        Version string, e.g. '4.7.3'

    Raises:
        ProbeError: If the daemon is missing, times out or exits non-zero
    """
    cmd = [executable, VERSION_FLAG]
    try:
        result = subprocess.run(cmd, timeout=PROBE_TIMEOUT, **probe_kwargs(platform))
    except FileNotFoundError as e:
        raise ProbeError(f"Daemon executable not found: {executable}", cause=e) from e
    except subprocess.TimeoutExpired as e:
        raise ProbeError(f"Timeout waiting for {executable} {VERSION_FLAG}", cause=e) from e
    except OSError as e:
        raise ProbeError(f"Cannot run {executable}: {e}", cause=e) from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise ProbeError(f"{executable} {VERSION_FLAG} exited with code {result.returncode}: {stderr}")

    version = parse_version(result.stdout or "")
    if not version:
        raise ProbeError(f"{executable} {VERSION_FLAG} printed no version")
    log.debug(f"Daemon version: {version}")
    return version
