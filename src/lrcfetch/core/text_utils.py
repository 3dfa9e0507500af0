"""
Text utilities for search keywords and raw lyric cleanup.

- build_keyword: fold a "(feat. X)" clause into the artist list
- strip_lrc_header: drop attribution/metadata lines some backends prepend
"""

from enum import Enum
from typing import Tuple

FEATURING_MARKER = " (feat. "
ARTIST_SEPARATOR = "、"


# ----------------------
# Keyword building
# ----------------------
def extract_between(text: str, start_marker: str, end_char: str) -> Tuple[str, str]:
    """
    Cut ``start_marker ... end_char`` out of ``text``.

    Returns:
        Tuple of (text without the cut span, text between marker and end_char).
        When either delimiter is missing, returns (text, "").
    """
    start = text.find(start_marker)
    if start == -1:
        return text, ""

    end = text.find(end_char, start)
    if end == -1:
        return text, ""

    remaining = text[:start] + text[end + 1 :]
    extracted = text[start + len(start_marker) : end]
    return remaining, extracted


def build_keyword(artist: str, title: str) -> str:
    """Build a ``"artist1、artist2 - title"`` search keyword."""
    title, featuring = extract_between(title, FEATURING_MARKER, ")")

    if featuring:
        artist = f"{artist}, {featuring}"

    artist = (
        artist.replace(", ", ARTIST_SEPARATOR)
        .replace(" & ", ARTIST_SEPARATOR)
        .replace(".", "")
    )
    return f"{artist} - {title}"


# ----------------------
# Header stripping
# ----------------------

# Tags that open a metadata header line
_HEADER_TAG_PREFIXES = (
    "[ti:",
    "[ar:",
    "[al:",
    "[by:",
    "[hash:",
    "[sign:",
    "[qq:",
    "[total:",
    "[offset:",
    "[id:",
)

# Credits right after a "[MM:SS.ff" timestamp, so the "]" sits at byte 9
_CREDIT_MARKER_OFFSET = 9
_CREDIT_MARKERS = tuple(
    marker.encode("utf-8")
    for marker in (
        "]Written by：",
        "]Lyrics by：",
        "]Composed by：",
        "]Producer：",
        "]作曲 : ",
        "]作词 : ",
    )
)


class HeaderScanState(Enum):
    """State of the top-down header scan."""

    DROPPING = "dropping"
    PENDING = "pending"
    STOPPED = "stopped"


def is_header_line(line: str) -> bool:
    """Check if a raw line is a metadata tag or credit line."""
    if line.startswith(_HEADER_TAG_PREFIXES):
        return True
    return line.encode("utf-8")[_CREDIT_MARKER_OFFSET:].startswith(_CREDIT_MARKERS)


def next_header_state(state: HeaderScanState, is_header: bool) -> HeaderScanState:
    """
    Advance the header scan by one line.

    A header line confirms any pending line as droppable. One unrecognized
    line becomes pending; a second one in a row ends the header region.
    """
    if state is HeaderScanState.STOPPED:
        return state
    if is_header:
        return HeaderScanState.DROPPING
    if state is HeaderScanState.PENDING:
        return HeaderScanState.STOPPED
    return HeaderScanState.PENDING


def strip_lrc_header(raw: str) -> str:
    """Remove leading header lines from raw lyrics and unescape ``&apos;``."""
    text = raw.replace("\r\n", "\n").strip()
    data = text.encode("utf-8")

    to_drop = 0
    maybe_to_drop = 0
    state = HeaderScanState.DROPPING

    for line in text.split("\n"):
        line_len = len(line.encode("utf-8")) + 1
        state = next_header_state(state, is_header_line(line))

        if state is HeaderScanState.DROPPING:
            to_drop += line_len + maybe_to_drop
            maybe_to_drop = 0
        elif state is HeaderScanState.PENDING:
            maybe_to_drop = line_len
        else:
            maybe_to_drop = 0
            break

    remainder = data[to_drop + maybe_to_drop :].decode("utf-8")
    return remainder.replace("&apos;", "'")
