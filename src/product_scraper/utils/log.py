from __future__ import annotations

import os

from scrapy.utils.log import configure_logging as scrapy_configure_logging


LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install the root log handler for the web process.

    Reuses Scrapy's logging setup so the ``LOG_LEVEL``/``LOG_FORMAT`` settings
    behave the same as they do for crawls. Without an explicit ``level`` the
    ``LOG_LEVEL`` environment variable decides, defaulting to INFO.
    """
    lvl = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    scrapy_configure_logging(
        {"LOG_LEVEL": lvl, "LOG_FORMAT": LOG_FORMAT, "LOG_INSTALL_ROOT_HANDLER": True}
    )
