"""Typed daemon configuration."""

from dataclasses import dataclass, field
from typing import Optional, Union

from . import paths
from .errors import ConfigError


@dataclass(frozen=True)
class PasswordAuth:
    """Username/password credentials."""
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class SignatureAuth:
    """Signing-key credentials stored in a key directory."""
    sk_path: str

    @classmethod
    def default(cls) -> "SignatureAuth":
        """Signing key at the platform's default location."""
        return cls(sk_path=str(paths.sk_path()))


AuthKind = Union[PasswordAuth, SignatureAuth]


@dataclass(frozen=True)
class DaemonConfig:
    """Configuration for starting the daemon.

    Built once by the caller and consumed by a single launch. Exactly one
    authentication variant is carried in ``auth``.
    """
    exit_hostname: str
    auth: AuthKind
    force_bridges: bool = False
    vpn_mode: bool = False
    region_whitelist: bool = False
    listen_on_all_interfaces: bool = False
    force_protocol: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.auth, (PasswordAuth, SignatureAuth)):
            raise ConfigError(f"Unsupported authentication kind: {type(self.auth).__name__}")
        if not self.exit_hostname:
            raise ConfigError("Missing exit server hostname")
        if isinstance(self.auth, SignatureAuth) and not self.auth.sk_path:
            raise ConfigError("Missing signing key path")
        if self.force_protocol is not None and not self.force_protocol.strip():
            raise ConfigError("force_protocol must be a non-empty protocol name")

    @classmethod
    def with_password(cls, username: str, password: str, exit_hostname: str, **options) -> "DaemonConfig":
        """Convenience constructor for password credentials."""
        return cls(exit_hostname=exit_hostname, auth=PasswordAuth(username, password), **options)

    def to_dict(self, redact: bool = False) -> dict:
        """Serialize to a plain dict (used for profile storage).

        Args:
            redact: Drop the password, for logging

        Returns:
            JSON-compatible dict
        """
        data = {
            "exit_hostname": self.exit_hostname,
            "force_bridges": self.force_bridges,
            "vpn_mode": self.vpn_mode,
            "region_whitelist": self.region_whitelist,
            "listen_on_all_interfaces": self.listen_on_all_interfaces,
            "force_protocol": self.force_protocol,
        }
        if isinstance(self.auth, PasswordAuth):
            data["auth"] = {"kind": "password", "username": self.auth.username}
            if not redact:
                data["auth"]["password"] = self.auth.password
        else:
            data["auth"] = {"kind": "signature", "sk_path": self.auth.sk_path}
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "DaemonConfig":
        """Build a config from :meth:`to_dict` output.

        Raises:
            ConfigError: If the dict is incomplete or malformed
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping, got {type(data).__name__}")
        auth_data = data.get("auth") or {}
        if not isinstance(auth_data, dict):
            raise ConfigError(f"Invalid authentication entry of type {type(auth_data).__name__}")
        kind = auth_data.get("kind")
        if kind == "password":
            if "username" not in auth_data or "password" not in auth_data:
                raise ConfigError("Password credentials need 'username' and 'password'")
            auth = PasswordAuth(auth_data["username"], auth_data["password"])
        elif kind == "signature":
            auth = SignatureAuth(auth_data.get("sk_path") or str(paths.sk_path()))
        else:
            raise ConfigError(f"Invalid authentication kind: {kind}")

        return cls(
            exit_hostname=data.get("exit_hostname", ""),
            auth=auth,
            force_bridges=bool(data.get("force_bridges", False)),
            vpn_mode=bool(data.get("vpn_mode", False)),
            region_whitelist=bool(data.get("region_whitelist", False)),
            listen_on_all_interfaces=bool(data.get("listen_on_all_interfaces", False)),
            force_protocol=data.get("force_protocol"),
        )
