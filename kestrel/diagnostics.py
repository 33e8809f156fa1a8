"""Logging setup.

The editor owns the terminal, so log records go to a file and never to the
screen.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

import platformdirs

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def default_log_path() -> Path:
    return Path(platformdirs.user_log_dir("kestrel")) / "kestrel.log"


def configure_logging(path: Optional[Path] = None, level: int = logging.INFO) -> Optional[Path]:
    """Send the ``kestrel`` logger's records to ``path``.

    Returns the log file path, or None if the file could not be opened (in
    which case logging stays silent).
    """
    path = Path(path) if path is not None else default_log_path()
    root = logging.getLogger("kestrel")
    root.setLevel(level)
    root.propagate = False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        root.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root.addHandler(handler)
    return path


def debug_sink(logger_name: str = "kestrel.debug") -> Callable[[str], None]:
    """A callable that writes editor state dumps to the log."""
    logger = logging.getLogger(logger_name)

    def sink(dump: str) -> None:
        logger.info(dump)

    return sink
