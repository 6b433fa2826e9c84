"""Logging setup for the launcher."""

import logging

from .paths import log_file

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(verbose: bool = False, to_file: bool = True) -> None:
    """Configure root logging: console plus the launcher log file."""
    handlers = [logging.StreamHandler()]
    if to_file:
        path = log_file()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(path))
        except OSError:
            pass  # console only

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
