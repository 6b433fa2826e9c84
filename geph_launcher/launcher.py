"""Daemon process launcher.

Resolves a LaunchPlan from a DaemonConfig and the host platform, then
spawns the daemon and hands the process back. The launcher does not wait
on, read from, or restart the child.
"""

import logging
import os
import subprocess
from typing import Optional

from . import paths
from .config import DaemonConfig
from .context import LauncherContext, get_context
from .errors import SpawnFailed
from .flags import build_args, redact
from .platform import LaunchPlan

log = logging.getLogger(__name__)

RPC_KEY_ENV = "GEPH_RPC_KEY"


def plan_launch(config: DaemonConfig, context: LauncherContext) -> LaunchPlan:
    """Resolve executable and argument vector for config.

    Raises:
        UnsupportedPlatform: VPN mode on a platform without support
        InsufficientPrivilege: VPN mode without required elevation
    """
    args = build_args(config, str(paths.debugpack_path()))
    if config.vpn_mode:
        return context.platform.vpn_plan(context.daemon_path, args, context.elevator)
    return context.platform.normal_plan(context.daemon_path, args)


def start(config: DaemonConfig, context: Optional[LauncherContext] = None) -> subprocess.Popen:
    """Start the daemon.

    Args:
        config: Daemon configuration
        context: Launcher context (defaults to the process-wide one)

    Returns:
        Handle to the running daemon; the caller owns it

    Raises:
        UnsupportedPlatform: VPN mode not available on this OS
        InsufficientPrivilege: VPN mode needs elevation
        SpawnFailed: The OS could not create the process
    """
    context = context or get_context()
    log.debug(f"Launch config: {config.to_dict(redact=True)}")

    rpc_key = context.rpc_key()
    if context.key_store.last_error:
        log.warning(f"RPC key not persisted: {context.key_store.last_error}")

    plan = plan_launch(config, context)
    log.info(f"Starting daemon on {context.platform.name}: {' '.join(redact(plan.argv))}")

    env = dict(os.environ)
    env[RPC_KEY_ENV] = rpc_key

    try:
        process = subprocess.Popen(plan.argv, env=env, **context.platform.popen_kwargs())
    except OSError as e:
        what = "elevation helper" if plan.elevated_with else "daemon"
        log.error(f"Cannot spawn {what} {plan.executable}: {e}")
        raise SpawnFailed(f"Cannot spawn {what} {plan.executable}: {e}", argv=redact(plan.argv), cause=e) from e

    log.info(f"Daemon started (PID {process.pid})")
    return process
