"""
Logging for cartsync.

Usage:
    from cartsync.logging import get_logger, describe_reference
    logger = get_logger(__name__)

    logger.debug(f"Added {describe_reference(latte)}")
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_package_logger() -> None:
    """Attach a stdout handler to the cartsync logger unless the host app configured logging."""
    package_logger = logging.getLogger("cartsync")
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    package_logger.setLevel(getattr(logging, level_name, logging.INFO))

    if logging.getLogger().handlers or package_logger.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)

    # upstash_redis talks REST through httpx; one line per cart write is noise
    logging.getLogger("httpx").setLevel(logging.WARNING)


_configure_package_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Get a logger under the cartsync namespace."""
    return logging.getLogger(name)


def loggable(value, max_length: int = 40) -> str:
    """
    Caller-supplied text (catalog ids and names, stream keys) made safe for one log line.

    Control characters are escaped so a product name cannot forge log entries.
    """
    if value is None or value == "":
        return "N/A"
    text = str(value).replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t").replace("\x00", "")
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def describe_reference(reference) -> str:
    """Short ``name [id]`` label for a purchasable reference."""
    return f"{loggable(reference.name, 30)} [{loggable(reference.id, 16)}]"


__all__ = ["LOG_FORMAT", "get_logger", "loggable", "describe_reference"]
