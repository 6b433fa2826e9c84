"""RPC key storage.

The RPC key authorizes local control requests to the running daemon. It
is kept in a plain text file under the user config directory so that every
launcher run and every control client agree on the same key.
"""

import logging
import os
import secrets
from pathlib import Path
from typing import Optional

from . import paths
from .errors import KeyPersistError
from .once import OnceCell

log = logging.getLogger(__name__)

KEY_PREFIX = "geph-rpc-key-"


def generate_key() -> str:
    """Fresh random key with 128 bits of entropy."""
    return f"{KEY_PREFIX}{secrets.randbits(128)}"


class RpcKeyStore:
    """Loads, generates and persists the RPC key."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else paths.rpc_key_path()
        self.last_error: Optional[KeyPersistError] = None
        self._key: OnceCell[str] = OnceCell()

    def load(self) -> Optional[str]:
        """Read the persisted key.

        Returns:
            The key, or None if missing, empty or unreadable
        """
        try:
            key = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            log.warning(f"Cannot read RPC key at {self.path}: {e}")
            return None
        return key or None

    def persist(self, key: str) -> None:
        """Write key to disk, creating parent directories.

        Raises:
            KeyPersistError: If the key cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(key, encoding="utf-8")
            if os.name == "posix":
                self.path.chmod(0o600)
        except OSError as e:
            raise KeyPersistError(f"Cannot write RPC key to {self.path}: {e}") from e

    def _load_or_create(self) -> str:
        key = self.load()
        if key:
            log.debug(f"Loaded RPC key from {self.path}")
            return key

        key = generate_key()
        try:
            self.persist(key)
            log.info(f"Generated new RPC key at {self.path}")
        except KeyPersistError as e:
            # Key stays usable for this process
            self.last_error = e
            log.warning(f"{e}; using in-memory key")
        return key

    def ensure(self) -> str:
        """Return the persisted key, generating one if needed.

        Computed once per store; later calls return the same value even if
        the file changes on disk. Persist failures are recorded in
        ``last_error`` rather than raised.
        """
        return self._key.get_or_init(self._load_or_create)
