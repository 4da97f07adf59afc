"""
Standardized error handling for the application.
Common error types shared by the cache, summarizer and feed layers.
"""

from typing import Optional


# Base exception class
class ApplicationError(Exception):
    """Base exception for all application errors."""
    pass


# Cache layer errors; recovered inside the stores, never surfaced to callers
class CacheError(ApplicationError):
    """Errors raised by a cache backend."""
    pass

class CacheUnavailable(CacheError):
    """The cache backend could not be reached."""
    pass

class MalformedCacheEntry(CacheError):
    """Stored cache data could not be parsed into a valid entry."""
    pass


class SourceFetchFailed(ApplicationError):
    """A news source (or every news source) could not be fetched."""
    pass


class GenerationFailed(ApplicationError):
    """
    The summarizer call failed or returned an unusable result.

    Attributes:
        provider_status: HTTP status reported by the provider, if any
        message: Human-readable failure description
    """

    def __init__(self, provider_status: Optional[int], message: str):
        self.provider_status = provider_status
        self.message = message
        if provider_status is not None:
            super().__init__(f"[{provider_status}] {message}")
        else:
            super().__init__(message)


class MissingInput(ApplicationError):
    """Content required for a generation attempt was not supplied."""
    pass


class ConfigurationError(ApplicationError):
    """Error in configuration or setup."""
    pass
