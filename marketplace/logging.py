"""
Logging for the marketplace client.

The client runs inside an app, so it only configures its own "marketplace"
logger tree and leaves the root logger to the host:

    from marketplace.logging import get_logger
    logger = get_logger(__name__)

Environment:
    LOG_LEVEL            level for marketplace.* loggers (default INFO)
    MARKETPLACE_RELEASE  "1" drops timestamps (device logs add their own)
"""

import logging
import os
import sys
from functools import cache

PACKAGE_LOGGER = "marketplace"

_DEBUG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
_RELEASE_FORMAT = "%(levelname)s [%(name)s] %(message)s"

# Ids and toast texts come from the API or the user; keep them on one line
_CONTROL_CHARS = str.maketrans({"\n": "\\n", "\r": "\\r", "\t": "\\t", "\x00": None})


@cache
def _package_logger() -> logging.Logger:
    """Attach a stdout handler to the package logger, once."""
    package = logging.getLogger(PACKAGE_LOGGER)
    level = getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO)
    package.setLevel(level)

    # Host apps that configured root logging get our records through propagation
    if not package.handlers and not logging.getLogger().handlers:
        release = os.environ.get("MARKETPLACE_RELEASE") == "1"
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_RELEASE_FORMAT if release else _DEBUG_FORMAT))
        package.addHandler(handler)

    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return package


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger under the marketplace tree (pass __name__)."""
    _package_logger()
    return logging.getLogger(name)


def sanitize_id_for_logging(id_value: object | None) -> str:
    """Cart, line or product id shortened to 8 chars; "N/A" when missing."""
    if id_value is None or id_value == "":
        return "N/A"
    return str(id_value).translate(_CONTROL_CHARS)[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Single-line, truncated copy of free text such as toast messages."""
    if not value:
        return "N/A"
    text = str(value).translate(_CONTROL_CHARS)
    return text if len(text) <= max_length else f"{text[:max_length]}..."


__all__ = [
    "PACKAGE_LOGGER",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
