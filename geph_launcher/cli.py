"""Command-line interface for the daemon launcher.

Usage:
    geph-launcher connect --exit EXIT -u USER           (prompt for password)
    geph-launcher connect --exit EXIT --keypair         (signing-key auth)
    geph-launcher connect --profile NAME                (use saved profile)
    geph-launcher connect ... --vpn --wait              (VPN mode, wait for exit)
    geph-launcher connect --profile NAME --no-vpn       (override a saved switch)
    geph-launcher version                               (daemon version)
    geph-launcher rpc-key                               (print RPC key)
    geph-launcher status                                (running daemons)
    geph-launcher profiles [--delete NAME]              (saved profiles)
"""

import argparse
import getpass
import sys
from typing import List, Optional

from . import profiles
from .config import DaemonConfig, PasswordAuth, SignatureAuth
from .context import get_context
from .errors import ConfigError, LauncherError
from .launcher import start
from .log import setup_logging
from .platform import find_daemon_processes

# Colors
GREEN = "\033[32m"
RED = "\033[31m"
YELLOW = "\033[33m"
NC = "\033[0m"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def _error(message: str) -> None:
    print(f"{RED}Error: {message}{NC}", file=sys.stderr)


def _pick(flag: Optional[bool], base: Optional[DaemonConfig], field: str) -> bool:
    """Command-line switch if given, else the profile value, else off."""
    if flag is not None:
        return flag
    return bool(base and getattr(base, field))


def _config_from_args(args: argparse.Namespace) -> DaemonConfig:
    """Build a DaemonConfig from connect arguments (and optional profile)."""
    base = None
    if args.profile:
        base = profiles.get_profile(args.profile)
        if base is None:
            raise ConfigError(f"No saved profile named '{args.profile}'")

    exit_hostname = args.exit_server or (base.exit_hostname if base else None)
    if not exit_hostname:
        raise ConfigError("Missing --exit server")

    if args.keypair or args.sk_path is not None:
        auth = SignatureAuth(args.sk_path) if args.sk_path is not None else SignatureAuth.default()
    elif args.username:
        password = args.password if args.password is not None else getpass.getpass("Password: ")
        auth = PasswordAuth(args.username, password)
    elif base:
        auth = base.auth
    else:
        raise ConfigError("Either --username or --keypair is required")

    return DaemonConfig(
        exit_hostname=exit_hostname,
        auth=auth,
        force_bridges=_pick(args.use_bridges, base, "force_bridges"),
        vpn_mode=_pick(args.vpn, base, "vpn_mode"),
        region_whitelist=_pick(args.exclude_prc, base, "region_whitelist"),
        listen_on_all_interfaces=_pick(args.listen_all, base, "listen_on_all_interfaces"),
        force_protocol=args.force_protocol or (base.force_protocol if base else None),
    )


def cmd_connect(args: argparse.Namespace) -> int:
    try:
        config = _config_from_args(args)
    except ConfigError as e:
        _error(str(e))
        return EXIT_USAGE

    if args.save:
        if profiles.save_profile(args.save, config):
            print(f"{GREEN}Saved profile '{args.save}'.{NC}")
        else:
            print(f"{YELLOW}Could not save profile '{args.save}'.{NC}")

    try:
        process = start(config, get_context())
    except LauncherError as e:
        _error(str(e))
        return EXIT_FAILURE

    print(f"{GREEN}Daemon started (PID {process.pid}).{NC}")
    if args.wait:
        try:
            return process.wait()
        except KeyboardInterrupt:
            process.terminate()
            return process.wait()
    return EXIT_OK


def cmd_version(args: argparse.Namespace) -> int:
    try:
        print(get_context().daemon_version())
    except LauncherError as e:
        _error(str(e))
        return EXIT_FAILURE
    return EXIT_OK


def cmd_rpc_key(args: argparse.Namespace) -> int:
    context = get_context()
    print(context.rpc_key())
    if context.key_store.last_error:
        print(f"{YELLOW}Warning: {context.key_store.last_error}{NC}", file=sys.stderr)
    return EXIT_OK


def cmd_status(args: argparse.Namespace) -> int:
    procs = find_daemon_processes(get_context().daemon_path)
    if not procs:
        print(f"{YELLOW}No running daemon found.{NC}")
        return EXIT_FAILURE
    for proc in procs:
        print(f"{GREEN}Daemon running (PID {proc.pid}){NC}")
    return EXIT_OK


def cmd_profiles(args: argparse.Namespace) -> int:
    if args.delete:
        if profiles.delete_profile(args.delete):
            print(f"{GREEN}Deleted profile '{args.delete}'.{NC}")
            return EXIT_OK
        _error(f"No saved profile named '{args.delete}'")
        return EXIT_FAILURE

    saved = profiles.get_profiles()
    if not saved:
        print("No saved profiles.")
        return EXIT_OK
    for name, data in sorted(saved.items()):
        if not isinstance(data, dict) or not isinstance(data.get("auth", {}), dict):
            print(f"  {name}: {YELLOW}invalid profile{NC}")
            continue
        auth = data.get("auth", {})
        who = auth.get("username") or "keypair"
        print(f"  {name}: {who} @ {data.get('exit_hostname')}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geph-launcher",
        description="Configure and start the geph4-client daemon",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    connect = sub.add_parser("connect", help="Start the daemon")
    connect.add_argument("--exit", dest="exit_server", help="Exit server hostname")
    connect.add_argument("--username", "-u", help="Account username")
    connect.add_argument("--password", "-p", help="Account password (prompted if omitted)")
    connect.add_argument("--keypair", action="store_true", help="Authenticate with the stored signing key")
    connect.add_argument("--sk-path", help="Signing key directory (implies --keypair)")
    connect.add_argument("--force-protocol", help="Force a transport protocol (e.g. obfs4)")
    connect.add_argument("--use-bridges", action=argparse.BooleanOptionalAction, help="Always connect through bridges")
    connect.add_argument("--exclude-prc", action=argparse.BooleanOptionalAction, help="Do not tunnel mainland China traffic")
    connect.add_argument("--listen-all", action=argparse.BooleanOptionalAction, help="Bind proxies on all interfaces")
    connect.add_argument("--vpn", action=argparse.BooleanOptionalAction, help="Start in VPN mode")
    connect.add_argument("--profile", help="Load a saved profile")
    connect.add_argument("--save", metavar="NAME", help="Save this configuration as a profile")
    connect.add_argument("--wait", action="store_true", help="Wait for the daemon to exit")
    connect.set_defaults(func=cmd_connect)

    sub.add_parser("version", help="Print the daemon version").set_defaults(func=cmd_version)
    sub.add_parser("rpc-key", help="Print the RPC key").set_defaults(func=cmd_rpc_key)
    sub.add_parser("status", help="List running daemons").set_defaults(func=cmd_status)

    prof = sub.add_parser("profiles", help="List saved profiles")
    prof.add_argument("--delete", metavar="NAME", help="Delete a saved profile")
    prof.set_defaults(func=cmd_profiles)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
