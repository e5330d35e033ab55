"""
Root logging setup.

Modules log through `logging.getLogger(__name__)`; this only installs the
stdout handler and level once per process.
"""

from __future__ import annotations

import logging
import sys

from . import config

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def init_logging(level: str | None = None) -> None:
    global _initialized
    if _initialized:
        return None

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(level or config.log_level())
    root.addHandler(handler)
    _initialized = True
