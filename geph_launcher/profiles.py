"""Saved connection profiles via system keyring."""

import json
import logging
from typing import Optional

import keyring

from .config import DaemonConfig
from .errors import ConfigError

log = logging.getLogger(__name__)

KEYRING_SERVICE = "geph-launcher"
PROFILES_KEY = "profiles"


def get_profiles() -> dict:
    """Get all saved profiles.

    Returns:
        Dict of profile_name -> serialized DaemonConfig
    """
    try:
        data = keyring.get_password(KEYRING_SERVICE, PROFILES_KEY)
        if data:
            saved = json.loads(data)
            if isinstance(saved, dict):
                return saved
            log.warning("Ignoring stored profiles: not a JSON object")
    except Exception as e:
        log.warning(f"Keyring error: {e}")
    return {}


def _save_profiles(profiles: dict) -> bool:
    """Save all profiles to keyring."""
    try:
        keyring.set_password(KEYRING_SERVICE, PROFILES_KEY, json.dumps(profiles))
        return True
    except Exception as e:
        log.error(f"Failed to save profiles: {e}")
        return False


def get_profile(name: str) -> Optional[DaemonConfig]:
    """Load a profile by name.

    Returns:
        DaemonConfig or None if no such profile

    Raises:
        ConfigError: If the stored profile is malformed
    """
    data = get_profiles().get(name)
    if data is None:
        return None
    try:
        return DaemonConfig.from_dict(data)
    except ConfigError as e:
        raise ConfigError(f"Profile '{name}' is invalid: {e}") from e


def save_profile(name: str, config: DaemonConfig) -> bool:
    """Save a profile, replacing any existing one with the same name."""
    profiles = get_profiles()
    profiles[name] = config.to_dict()
    return _save_profiles(profiles)


def delete_profile(name: str) -> bool:
    """Delete a profile.

    Returns:
        True if deleted
    """
    profiles = get_profiles()
    if name in profiles:
        del profiles[name]
        return _save_profiles(profiles)
    return False


def delete_all() -> bool:
    """Delete all profiles."""
    try:
        keyring.delete_password(KEYRING_SERVICE, PROFILES_KEY)
        return True
    except Exception:
        return False
