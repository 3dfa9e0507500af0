"""Custom exceptions for lrcfetch.

"No lyrics found" is not an error: resolvers and providers return ``None``
for it. Everything below aborts the resolution that raised it.
"""

from typing import Optional


class LrcFetchError(Exception):
    """Base exception for lrcfetch."""
    pass


class TransportError(LrcFetchError):
    """Request could not be sent, timed out, or returned a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(LrcFetchError):
    """Backend returned a body that does not have the expected shape."""
    pass


class DecodeError(ParseError):
    """Fetched lyric content is not valid base64 or not valid UTF-8."""
    pass


class ValidationError(LrcFetchError):
    """Invalid input parameters."""
    pass


class ConfigError(LrcFetchError):
    """Invalid configuration value."""
    pass
