"""Process-wide logging setup.

Loggers are plain module loggers; this only fixes the format and the level.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR). Unknown names fall
            back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # Per-request access lines duplicate the trace-id logs.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
