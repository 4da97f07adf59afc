"""
Logging setup and key=value context logging.

The coordinator and the summarizer log through StructuredLogger so each line
carries the cache key, timestamps and provider details it concerns.
"""

import logging
import os
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Client libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "anthropic", "urllib3", "sqlalchemy.engine")


class StructuredLogger:
    """
    Logger that appends key=value context to every message.

    Context added with add_context() is sticky; keyword arguments passed to a
    single call apply to that line only.
    """

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            context: Initial sticky context
        """
        self.logger = logging.getLogger(name)
        self.context = dict(context or {})

    def add_context(self, **kwargs) -> None:
        """Add context included in all later messages."""
        self.context.update(kwargs)

    def bind(self, **kwargs) -> "StructuredLogger":
        """Return a logger for the same name with extra sticky context."""
        return StructuredLogger(self.logger.name, {**self.context, **kwargs})

    def _format(self, msg: str, extra_context: Dict[str, Any]) -> str:
        context = {**self.context, **extra_context}
        if not context:
            return msg
        return msg + " | " + ' '.join(f"{k}={v}" for k, v in context.items())

    def debug(self, msg: str, **kwargs) -> None:
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(self._format(msg, kwargs))

    def info(self, msg: str, **kwargs) -> None:
        self.logger.info(self._format(msg, kwargs))

    def warning(self, msg: str, **kwargs) -> None:
        self.logger.warning(self._format(msg, kwargs))

    def error(self, msg: str, **kwargs) -> None:
        self.logger.error(self._format(msg, kwargs))

    def exception(self, msg: str, exc_info=True, **kwargs) -> None:
        """Log at ERROR with the active exception's traceback."""
        self.logger.error(self._format(msg, kwargs), exc_info=exc_info)


def _resolve_level(level) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level=logging.INFO, log_file=None, console=True, log_format=LOG_FORMAT):
    """
    Configure application-wide logging.

    Replaces any handlers on the root logger, so calling it twice (CLI then
    server factory) does not duplicate output.

    Args:
        level: Logging level, as an int or a name such as "INFO"
        log_file: Optional file path for logging
        console: Whether to log to stderr
        log_format: Log format string

    Returns:
        The root logger
    """
    level = _resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(log_format)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Keep request-level chatter out unless explicitly debugging
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    return root_logger
