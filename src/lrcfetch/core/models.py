"""Data models for lyrics queries, results and parsed LRC timelines."""

import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, List, Optional, Tuple, Union

_LENGTH_RE = re.compile(r"^([0-9]+):([0-9]+)$")
_OFFSET_RE = re.compile(r"^-?[0-9]+$")


@dataclass(frozen=True)
class Query:
    """A single lyrics lookup: who, what, and how long."""

    artist: str
    title: str
    duration_ms: int
    album: Optional[str] = None

    @property
    def duration_seconds(self) -> int:
        """Duration in whole seconds (truncated)."""
        return self.duration_ms // 1000


@dataclass(frozen=True)
class LyricsResult:
    """Lyrics text returned to callers.

    ``synced=True`` means ``text`` is LRC source and re-parses into a Timeline.
    """

    text: str
    synced: bool
    source: str = ""

    def as_timeline(self) -> Optional["Timeline"]:
        if not self.synced:
            return None
        from .lrc import parse_timeline

        return parse_timeline(self.text)


# ----------------------
# Parsed LRC lines
# ----------------------
@dataclass(frozen=True)
class LyricLine:
    timestamp_ms: int
    text: str


@dataclass(frozen=True)
class MetadataLine:
    key: str
    value: str


@dataclass(frozen=True)
class InvalidLine:
    pass


LrcLine = Union[LyricLine, MetadataLine, InvalidLine]


@dataclass
class Timeline:
    """Structured view of an LRC document.

    ``lines`` maps a timestamp in milliseconds to the lyric shown from then on.
    It always holds a ``0 -> ""`` entry seeded before any parsed line.
    """

    metadata: Dict[str, str] = field(default_factory=dict)
    lines: Dict[int, str] = field(default_factory=lambda: {0: ""})
    invalid_line_count: int = 0

    def _meta(self, key: str) -> Optional[str]:
        return self.metadata.get(key)

    @property
    def title(self) -> Optional[str]:
        return self._meta("ti")

    @property
    def artist(self) -> Optional[str]:
        return self._meta("ar")

    @property
    def album(self) -> Optional[str]:
        return self._meta("al")

    @property
    def author(self) -> Optional[str]:
        return self._meta("au")

    @property
    def file_author(self) -> Optional[str]:
        return self._meta("by")

    @property
    def tool(self) -> Optional[str]:
        tool = self._meta("re")
        return tool if tool is not None else self._meta("tool")

    @property
    def version(self) -> Optional[str]:
        return self._meta("ve")

    @property
    def duration(self) -> Optional[timedelta]:
        """Total length from the ``[length:MM:SS]`` tag."""
        value = self._meta("length")
        if value is None:
            return None
        match = _LENGTH_RE.match(value)
        if not match:
            return None
        minutes, seconds = int(match.group(1)), int(match.group(2))
        return timedelta(seconds=minutes * 60 + seconds)

    @property
    def offset(self) -> Optional[timedelta]:
        """Signed offset from the ``[offset:+/-ms]`` tag."""
        value = self._meta("offset")
        if value is None:
            return None
        value = value.lstrip("+")
        if not _OFFSET_RE.match(value):
            return None
        return timedelta(milliseconds=int(value))

    def sorted_lines(self) -> List[Tuple[int, str]]:
        """Lyric lines as (timestamp_ms, text) pairs in playback order."""
        return sorted(self.lines.items())
