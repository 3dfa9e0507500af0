"""LRC parsing and Timeline construction.

This module handles:
- Classifying LRC source lines (lyric / metadata / invalid)
- Folding classified lines into a Timeline
- Rendering a Timeline back to LRC text
"""

import re
from typing import Iterable, List, Optional

from .models import InvalidLine, LrcLine, LyricLine, MetadataLine, Timeline

# ----------------------
# LRC line regexes
# ----------------------
_LYRIC_RE = re.compile(
    r"""
    ^\[
    (?P<min>[0-9]{2,})      # minutes, at least two digits
    :
    (?P<sec>[0-9]{2})       # seconds, exactly two digits
    \.
    (?P<frac>[0-9]{2,3})    # hundredths or thousandths
    \]
    (?P<text>.*)$
    """,
    re.VERBOSE,
)

_METADATA_RE = re.compile(r"^\[(?P<key>.+?):(?P<value>.*?)\]$")


def _frac_to_millis(frac: str) -> int:
    # ".12" is 120ms and ".1" is 100ms: pad, never scale
    return int(frac.ljust(3, "0"))


def _source_lines(raw: str) -> List[str]:
    """Split raw text into non-empty lines with ``#`` comments removed."""
    lines: List[str] = []
    for line in raw.replace("\r\n", "\n").strip().split("\n"):
        line = line.split("#", 1)[0].strip()
        if line:
            lines.append(line)
    return lines


def classify_line(line: str) -> LrcLine:
    """Classify a single comment-stripped, trimmed LRC line."""
    match = _LYRIC_RE.match(line)
    if match:
        timestamp = (
            int(match.group("min")) * 60_000
            + int(match.group("sec")) * 1000
            + _frac_to_millis(match.group("frac"))
        )
        return LyricLine(timestamp_ms=timestamp, text=match.group("text").strip())

    match = _METADATA_RE.match(line)
    if match:
        return MetadataLine(
            key=match.group("key").strip(), value=match.group("value").strip()
        )

    return InvalidLine()


def parse_lrc(raw: str) -> Optional[List[LrcLine]]:
    """
    Parse raw LRC text into classified lines.

    Returns:
        The classified lines in source order, or None when the text has no
        lines left after comment stripping or when every line is invalid.
    """
    if not raw:
        return None

    lines = [classify_line(line) for line in _source_lines(raw)]
    if not lines or all(isinstance(line, InvalidLine) for line in lines):
        return None
    return lines


def build_timeline(lines: Iterable[LrcLine]) -> Timeline:
    """Fold classified lines into a Timeline; later duplicates win."""
    timeline = Timeline(metadata={}, lines={0: ""}, invalid_line_count=0)

    for line in lines:
        if isinstance(line, LyricLine):
            timeline.lines[line.timestamp_ms] = line.text
        elif isinstance(line, MetadataLine):
            timeline.metadata[line.key] = line.value
        else:
            timeline.invalid_line_count += 1

    return timeline


def parse_timeline(raw: str) -> Optional[Timeline]:
    """Parse raw LRC text straight into a Timeline."""
    lines = parse_lrc(raw)
    if lines is None:
        return None
    return build_timeline(lines)


# ----------------------
# Rendering
# ----------------------
def format_timestamp(timestamp_ms: int) -> str:
    """Format milliseconds as an LRC ``[MM:SS.fff]`` tag."""
    minutes, remainder = divmod(timestamp_ms, 60_000)
    seconds, millis = divmod(remainder, 1000)
    return f"[{minutes:02d}:{seconds:02d}.{millis:03d}]"


def format_timeline(timeline: Timeline, include_seed: bool = False) -> str:
    """
    Render a Timeline back to LRC text.

    Metadata tags come first, followed by lyric lines in timestamp order.
    The synthetic ``0 -> ""`` seed line is left out unless ``include_seed``
    is set or the slot holds real text.
    """
    out: List[str] = [f"[{key}:{value}]" for key, value in timeline.metadata.items()]

    for timestamp, text in timeline.sorted_lines():
        if timestamp == 0 and text == "" and not include_seed:
            continue
        out.append(f"{format_timestamp(timestamp)}{text}")

    return "\n".join(out)
