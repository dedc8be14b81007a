"""cmdcenter - entry point and logging setup."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3


def _log_dir() -> Path:
    """Owner-only log directory under the user's home."""
    path = Path.home() / ".cmdcenter" / "logs"
    path.mkdir(parents=True, exist_ok=True)
    path.chmod(0o700)
    return path


def _setup_logging() -> logging.Logger:
    """Send log records to a rotating file in ~/.cmdcenter/logs/.

    The level is INFO, or DEBUG when CMDCENTER_DEBUG is set.
    """
    handler = RotatingFileHandler(
        _log_dir() / "cmdcenter.log",
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if os.environ.get("CMDCENTER_DEBUG") else logging.INFO)
    root.addHandler(handler)

    return logging.getLogger(__name__)


def main():
    """Entry point for the application.

    Runs a CLI subcommand (parse, capabilities, open, close, shell).
    If no subcommand is given, starts the interactive shell.
    """
    logger = _setup_logging()

    from .cli import run_cli

    result = run_cli()
    if result is None:
        logger.debug("No subcommand given, starting shell")
        result = run_cli([*sys.argv[1:], "shell"])

    sys.exit(result)


if __name__ == "__main__":
    main()
