"""Core functionality modules."""

from .lrc import format_timeline, parse_lrc, parse_timeline
from .models import (
    InvalidLine,
    LrcLine,
    LyricLine,
    LyricsResult,
    MetadataLine,
    Query,
    Timeline,
)
from .text_utils import build_keyword, strip_lrc_header

__all__ = [
    "Query",
    "LyricsResult",
    "LyricLine",
    "MetadataLine",
    "InvalidLine",
    "LrcLine",
    "Timeline",
    "parse_lrc",
    "parse_timeline",
    "format_timeline",
    "build_keyword",
    "strip_lrc_header",
]
