"""Logging setup for the plant builder API."""

from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> str:
    """Set the root and ``plantbuilder`` log level and return the level used.

    Falls back to ``PLANTBUILDER_LOG_LEVEL``, then INFO. Uvicorn's own loggers
    follow the same level so request logs line up with ours.
    """

    resolved = (level or os.getenv("PLANTBUILDER_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    for name in ("plantbuilder", "uvicorn", "uvicorn.access"):
        logging.getLogger(name).setLevel(resolved)
    return resolved
