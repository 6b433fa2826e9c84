"""Platform directories used by the launcher and the daemon."""

import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir, user_log_dir

APP_NAME = "geph-launcher"

CONFIG_DIR_ENV = "GEPH_LAUNCHER_CONFIG_DIR"
DATA_DIR_ENV = "GEPH_LAUNCHER_DATA_DIR"

CREDENTIALS_DIR = "geph4-credentials"
RPC_KEY_FILE = "rpc_key"
DEBUGPACK_FILE = "geph4-logs.db"
SK_DIR = "geph4-sk"


def config_dir() -> Path:
    """Get the user configuration directory shared with the daemon."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path(user_config_dir(roaming=True))


def data_dir() -> Path:
    """Get the user local data directory."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override)
    return Path(user_data_dir())


def rpc_key_path() -> Path:
    """Path of the persisted RPC key."""
    return config_dir() / CREDENTIALS_DIR / RPC_KEY_FILE


def debugpack_path() -> Path:
    """Path the daemon stores its debug pack (log database) at."""
    return data_dir() / DEBUGPACK_FILE


def sk_path() -> Path:
    """Directory holding the daemon's signing key for keypair auth."""
    return config_dir() / SK_DIR


def log_file() -> Path:
    """Launcher log file path."""
    return Path(user_log_dir(APP_NAME)) / "launcher.log"
