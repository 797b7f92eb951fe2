"""
utils/logger.py
---------------
Process-wide logging setup. Modules call `get_logger(__name__)`; the
first call installs a stdout handler on the root logger at LOG_LEVEL.
"""

import logging
import sys

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "telegram.ext.Updater")

_configured = False


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Attach the stdout handler to the root logger, once."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level, logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Named logger for a module (usually ``__name__``)."""
    configure_logging()
    return logging.getLogger(name)
