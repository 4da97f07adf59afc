"""Configuration utilities for the summary service."""

import os
import logging
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from common.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CACHE_KEY = "latest-summary"


def get_env_var(name, default=None):
    """
    Get an environment variable or return a default value.

    Args:
        name: Name of the environment variable
        default: Default value if not found

    Returns:
        Value of the environment variable or default
    """
    value = os.environ.get(name, default)
    if value is None:
        logger.warning(f"Environment variable {name} not found")
    return value


def get_int_env_var(name, default: int) -> int:
    """Read an integer environment variable, raising ConfigurationError on bad input."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(f"Environment variable {name} must be an integer, got {raw!r}")


@dataclass
class Settings:
    """Runtime settings for the server and the headless update."""

    claude_api_key: Optional[str] = None
    claude_model: str = "sonnet"
    throttle_minutes: int = 91
    cache_backend: str = "file"
    cache_file: str = "summary_cache.txt"
    cache_url: str = "sqlite:///summary_cache.db"
    cache_key: str = DEFAULT_CACHE_KEY
    feed_path: str = "feed.xml"
    site_url: str = "http://localhost:3000"
    display_timezone: str = "America/New_York"
    host: str = "0.0.0.0"
    port: int = 3000
    public_dir: str = "public"
    log_level: str = "INFO"
    log_file: Optional[str] = None
    feed_item_limit: int = 10
    fetch_workers: int = 8

    def __post_init__(self):
        if self.throttle_minutes <= 0:
            raise ConfigurationError("THROTTLE_MINUTES must be positive")
        try:
            ZoneInfo(self.display_timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown DISPLAY_TIMEZONE {self.display_timezone!r}") from e

    @property
    def throttle_ms(self) -> int:
        """Throttle window in milliseconds."""
        return self.throttle_minutes * 60 * 1000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (and .env)."""
        api_key = os.environ.get("CLAUDE_API_KEY")
        if api_key is not None:
            api_key = api_key.strip() or None
        if not api_key:
            logger.warning("CLAUDE_API_KEY environment variable is missing")

        return cls(
            claude_api_key=api_key,
            claude_model=get_env_var("CLAUDE_MODEL", "sonnet"),
            throttle_minutes=get_int_env_var("THROTTLE_MINUTES", 91),
            cache_backend=get_env_var("CACHE_BACKEND", "file").strip().lower(),
            cache_file=get_env_var("CACHE_FILE", "summary_cache.txt"),
            cache_url=get_env_var("CACHE_URL", "sqlite:///summary_cache.db"),
            cache_key=get_env_var("CACHE_KEY", DEFAULT_CACHE_KEY),
            feed_path=get_env_var("FEED_PATH", "feed.xml"),
            site_url=get_env_var("SITE_URL", "http://localhost:3000").rstrip("/"),
            display_timezone=get_env_var("DISPLAY_TIMEZONE", "America/New_York"),
            host=get_env_var("HOST", "0.0.0.0"),
            port=get_int_env_var("PORT", 3000),
            public_dir=get_env_var("PUBLIC_DIR", "public"),
            log_level=get_env_var("LOG_LEVEL", "INFO"),
            log_file=get_env_var("LOG_FILE", "") or None,
            feed_item_limit=get_int_env_var("FEED_ITEM_LIMIT", 10),
            fetch_workers=get_int_env_var("FETCH_WORKERS", 8),
        )
