"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging
import sys

from . import settings


def setup_logging() -> None:
    """
    Configure the root logger. Call once at startup.
    """
    logging.basicConfig(
        level=settings.log_level(),
        format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
        stream=sys.stdout,
    )
    # asyncpg logs every pool reconnect at INFO.
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
