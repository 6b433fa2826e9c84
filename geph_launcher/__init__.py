"""Geph launcher - configures, authenticates and starts the geph4-client daemon."""

from .config import DaemonConfig, PasswordAuth, SignatureAuth
from .context import LauncherContext, get_context
from .errors import (
    LauncherError,
    ConfigError,
    KeyPersistError,
    UnsupportedPlatform,
    InsufficientPrivilege,
    SpawnFailed,
    ProbeError,
)
from .flags import build_args, auth_flags
from .launcher import start, plan_launch
from .platform import LaunchPlan, detect_platform
from .rpc_key import RpcKeyStore

__version__ = "0.1.0"

__all__ = [
    # Config
    "DaemonConfig",
    "PasswordAuth",
    "SignatureAuth",
    # Context
    "LauncherContext",
    "get_context",
    # Errors
    "LauncherError",
    "ConfigError",
    "KeyPersistError",
    "UnsupportedPlatform",
    "InsufficientPrivilege",
    "SpawnFailed",
    "ProbeError",
    # Flags
    "build_args",
    "auth_flags",
    # Launch
    "start",
    "plan_launch",
    "LaunchPlan",
    "detect_platform",
    # RPC key
    "RpcKeyStore",
]
