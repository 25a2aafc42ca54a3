"""Server logging setup.

Ensures all ``cvforge.*`` log messages are written to a rotating log file at
INFO level while the HTTP server runs, regardless of the console level
chosen with ``--debug``.

Call :func:`configure_server_logging` once (the ``serve`` command does)
before the server starts.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from cvforge.core.paths import get_log_dir

_LOG_FILE_NAME = "cvforge-server.log"
_MAX_BYTES = 2 * 1024 * 1024  # 2 MB per file
_BACKUP_COUNT = 3
_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_server_logging(log_dir: Path | None = None) -> Path:
    """Attach a rotating file handler to the ``cvforge`` logger.

    Safe to call multiple times; only configures once. Returns the path to
    the log file.
    """
    global _configured
    log_file = (log_dir or get_log_dir()) / _LOG_FILE_NAME

    if _configured:
        return log_file

    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_file,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))

    root = logging.getLogger("cvforge")
    root.addHandler(handler)
    # Let INFO through even when the console is at WARNING.
    if root.level == logging.NOTSET or root.level > logging.INFO:
        root.setLevel(logging.INFO)

    _configured = True
    return log_file
