"""
Client settings.

Values come from environment variables; a `.env` file next to the working
directory is loaded first when present (python-dotenv), so real
environment variables always win.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from marketplace.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_CURRENCY = "BRL"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the REST client and money display."""
    api_url: str = DEFAULT_API_URL
    api_token: Optional[str] = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    currency: str = DEFAULT_CURRENCY


def _read_timeout(raw: Optional[str]) -> float:
    if not raw:
        return DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid MARKETPLACE_HTTP_TIMEOUT={raw!r}, using {DEFAULT_HTTP_TIMEOUT}")
        return DEFAULT_HTTP_TIMEOUT
    if value <= 0:
        logger.warning(f"Non-positive MARKETPLACE_HTTP_TIMEOUT={raw!r}, using {DEFAULT_HTTP_TIMEOUT}")
        return DEFAULT_HTTP_TIMEOUT
    return value


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build settings from the environment (optionally seeded from a .env file)."""
    load_dotenv(dotenv_path=env_file, override=False)

    return Settings(
        api_url=os.environ.get("MARKETPLACE_API_URL", DEFAULT_API_URL).rstrip("/"),
        api_token=os.environ.get("MARKETPLACE_API_TOKEN") or None,
        http_timeout=_read_timeout(os.environ.get("MARKETPLACE_HTTP_TIMEOUT")),
        currency=os.environ.get("MARKETPLACE_CURRENCY", DEFAULT_CURRENCY).upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings."""
    return load_settings()
