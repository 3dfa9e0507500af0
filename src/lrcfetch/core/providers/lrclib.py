"""LrcLib lyrics backend.

LrcLib search results carry the lyrics inline, so a single request is
enough. The best track is the first one whose duration matches the query
to the second; failing that, the one whose title length is closest.
"""

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import httpx

from ... import config
from ...exceptions import ParseError
from ...utils.logging import get_logger
from ..http import fetch_json
from ..lrc import parse_lrc, parse_timeline
from ..models import LyricsResult, Query, Timeline
from .base import LyricsProvider

logger = get_logger(__name__)


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ParseError(f"Expected '{key}' to be a string in lrclib track")
    return value


@dataclass(frozen=True)
class LrcLibTrack:
    """One LrcLib search result."""

    id: int
    track_name: str
    artist_name: str
    duration: float
    album_name: Optional[str] = None
    instrumental: bool = False
    plain_lyrics: Optional[str] = None
    synced_lyrics: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "LrcLibTrack":
        if not isinstance(data, dict):
            raise ParseError("Expected an object for lrclib track")

        track_id = data.get("id")
        track_name = data.get("trackName")
        artist_name = data.get("artistName")
        duration = data.get("duration")

        if isinstance(track_id, bool) or not isinstance(track_id, int):
            raise ParseError("Missing or invalid 'id' in lrclib track")
        if not isinstance(track_name, str) or not isinstance(artist_name, str):
            raise ParseError("Missing track or artist name in lrclib track")
        if (
            isinstance(duration, bool)
            or not isinstance(duration, (int, float))
            or not math.isfinite(duration)
        ):
            raise ParseError("Missing or invalid 'duration' in lrclib track")

        return cls(
            id=track_id,
            track_name=track_name,
            artist_name=artist_name,
            duration=float(duration),
            album_name=_optional_str(data, "albumName"),
            instrumental=bool(data.get("instrumental", False)),
            plain_lyrics=_optional_str(data, "plainLyrics"),
            synced_lyrics=_optional_str(data, "syncedLyrics"),
        )

    def lyrics(self, synced: bool) -> Optional[str]:
        return self.synced_lyrics if synced else self.plain_lyrics

    def timeline(self) -> Optional[Timeline]:
        """Parse synced lyrics on demand."""
        if self.synced_lyrics is None:
            return None
        return parse_timeline(self.synced_lyrics)


def best_matching_track(
    tracks: Sequence[LrcLibTrack], title: str, duration_seconds: int
) -> Optional[LrcLibTrack]:
    """
    Pick the best track for a query.

    An exact whole-second duration match wins outright. Otherwise the track
    whose title length (in characters) is closest to ``title`` wins; ties go
    to the earlier track.
    """
    for track in tracks:
        if int(track.duration) == duration_seconds:
            return track

    if not tracks:
        return None

    title_len = len(title)
    return min(tracks, key=lambda t: abs(len(t.track_name) - title_len))


class LrcLibProvider(LyricsProvider):
    """Metadata-search backend."""

    name = "lrclib"

    def __init__(self, client: httpx.AsyncClient, base_url: Optional[str] = None):
        super().__init__(client)
        self.base_url = (base_url or config.LRCLIB_BASE_URL).rstrip("/")

    async def search(
        self, artist: str, title: str, album: Optional[str] = None
    ) -> List[LrcLibTrack]:
        params = {"track_name": title, "artist_name": artist}
        if album:
            params["album_name"] = album

        logger.debug(f"Querying lrclib with {params}")
        data = await fetch_json(
            self.client,
            f"{self.base_url}/api/search",
            params=params,
            headers={"Lrclib-Client": config.LRCLIB_CLIENT_HEADER},
            context="lrclib search",
        )
        if not isinstance(data, list):
            raise ParseError("Expected a list from lrclib search")
        return [LrcLibTrack.from_dict(item) for item in data]

    async def tracks_with_lyrics(self, query: Query, synced: bool) -> List[LrcLibTrack]:
        """Search and keep only tracks that have the requested lyrics flavor."""
        tracks = await self.search(query.artist, query.title, query.album)
        return [t for t in tracks if t.lyrics(synced) is not None]

    async def resolve(self, query: Query, synced: bool = True) -> Optional[LyricsResult]:
        tracks = await self.tracks_with_lyrics(query, synced)
        best = best_matching_track(tracks, query.title, query.duration_seconds)
        if best is None:
            return None

        logger.debug(
            f"LrcLib picked '{best.track_name}' by {best.artist_name} "
            f"({best.duration:.0f}s) out of {len(tracks)}"
        )
        text = best.lyrics(synced)
        if synced and parse_lrc(text) is None:
            logger.warning(f"LrcLib track {best.id} has no usable LRC lines")
            return None
        return LyricsResult(text=text, synced=synced, source=self.name)
