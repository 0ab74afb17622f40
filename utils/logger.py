"""
utils/logger.py
---------------
Logging setup for the data layer.

The HTTP service importing these repositories usually configures logging
itself; in that case its handlers are kept and only the level and the
library loggers below are adjusted.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# passlib warns on every start that it cannot read the bcrypt version.
_QUIET_LOGGERS = {"passlib": logging.ERROR}

_configured = False


def configure_logging(level: str = LOG_LEVEL) -> None:
    """
    Set up root logging once per process.

    A stdout handler is attached only when the root logger has none yet.
    """
    global _configured
    if _configured:
        return
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Named logger for a module; configures logging on first use."""
    configure_logging()
    return logging.getLogger(name)
