"""
Common utilities shared by every layer of the summary service.

- errors: Exception taxonomy for cache, feed and generation failures
- logging: Structured logging utilities
- performance: Performance tracking decorator
"""

from .logging import configure_logging, StructuredLogger
from .performance import track_performance
from .errors import (
    ApplicationError,
    CacheError,
    CacheUnavailable,
    MalformedCacheEntry,
    SourceFetchFailed,
    GenerationFailed,
    MissingInput,
    ConfigurationError,
)

__all__ = [
    'configure_logging',
    'StructuredLogger',
    'track_performance',
    'ApplicationError',
    'CacheError',
    'CacheUnavailable',
    'MalformedCacheEntry',
    'SourceFetchFailed',
    'GenerationFailed',
    'MissingInput',
    'ConfigurationError',
]
