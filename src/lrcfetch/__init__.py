"""lrcfetch - resolve synced and plain song lyrics from public backends."""

__version__ = "0.1.0"

from .core.models import LyricsResult, Query, Timeline
from .core.resolver import LyricsResolver, resolve_lyrics
from .exceptions import (
    ConfigError,
    DecodeError,
    LrcFetchError,
    ParseError,
    TransportError,
    ValidationError,
)

__all__ = [
    "__version__",
    "LyricsResolver",
    "resolve_lyrics",
    "Query",
    "LyricsResult",
    "Timeline",
    "LrcFetchError",
    "TransportError",
    "ParseError",
    "DecodeError",
    "ValidationError",
    "ConfigError",
]
