"""Daemon command-line flag assembly.

The daemon parses these as flag/value pairs followed by a trailing
authentication sub-command, so the order below is part of the contract.
"""

from typing import List

from .config import DaemonConfig, PasswordAuth, SignatureAuth, AuthKind

# Global flags
EXIT_SERVER = "--exit-server"
FORCE_PROTOCOL = "--force-protocol"
DEBUGPACK_PATH = "--debugpack-path"
EXCLUDE_PRC = "--exclude-prc"
USE_BRIDGES = "--use-bridges"
SOCKS5_LISTEN = "--socks5-listen"
HTTP_LISTEN = "--http-listen"

# Default listeners when binding all interfaces
SOCKS5_LISTEN_ALL = "0.0.0.0:9909"
HTTP_LISTEN_ALL = "0.0.0.0:9910"

# Authentication sub-commands
AUTH_PASSWORD = "auth-password"
AUTH_KEYPAIR = "auth-keypair"
USERNAME = "--username"
PASSWORD = "--password"
SK_PATH = "--sk-path"

SECRET_FLAGS = {PASSWORD}


def auth_flags(auth: AuthKind) -> List[str]:
    """Authentication sub-command and its flags."""
    if isinstance(auth, PasswordAuth):
        return [AUTH_PASSWORD, USERNAME, auth.username, PASSWORD, auth.password]
    if isinstance(auth, SignatureAuth):
        return [AUTH_KEYPAIR, SK_PATH, auth.sk_path]
    raise TypeError(f"Unknown auth kind: {auth!r}")


def build_args(config: DaemonConfig, debugpack_path: str) -> List[str]:
    """Build the argument vector that follows the connect sub-command.

    Args:
        config: Daemon configuration
        debugpack_path: Where the daemon should keep its debug pack

    Returns:
        Ordered list of arguments
    """
    args = [EXIT_SERVER, config.exit_hostname]
    if config.force_protocol:
        args.extend([FORCE_PROTOCOL, config.force_protocol])
    args.extend([DEBUGPACK_PATH, str(debugpack_path)])

    if config.region_whitelist:
        args.append(EXCLUDE_PRC)
    if config.force_bridges:
        args.append(USE_BRIDGES)
    if config.listen_on_all_interfaces:
        args.extend([SOCKS5_LISTEN, SOCKS5_LISTEN_ALL, HTTP_LISTEN, HTTP_LISTEN_ALL])

    args.extend(auth_flags(config.auth))
    return args


def redact(args: List[str]) -> List[str]:
    """Copy of args with secret values masked, for logging."""
    masked = []
    hide_next = False
    for arg in args:
        if hide_next:
            masked.append("***")
            hide_next = False
            continue
        masked.append(arg)
        hide_next = arg in SECRET_FLAGS
    return masked
