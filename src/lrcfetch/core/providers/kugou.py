"""KuGou lyrics backend.

KuGou identifies lyrics by an (id, accesskey) pair. The search runs in
three steps: keyword -> song hashes, hash -> lyric candidates, candidate ->
base64 LRC body. Songs are matched on duration with a tolerance that widens
one second at a time; if no song matches, lyric candidates are searched by
keyword directly.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Any, List, Optional

from ... import config
from ...exceptions import DecodeError, ParseError
from ...utils.logging import get_logger
from ..http import fetch_json, fetch_text, parse_json_from_text
from ..lrc import parse_lrc
from ..models import LyricsResult, Query
from ..text_utils import build_keyword, strip_lrc_header
from .base import LyricsProvider

logger = get_logger(__name__)

_BASE_PARAMS = {"ver": "1", "man": "yes"}


def _require(entry: Any, key: str, kind: Any, context: str) -> Any:
    if not isinstance(entry, dict):
        raise ParseError(f"Expected an object in {context}, got {type(entry).__name__}")
    value = entry.get(key)
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ParseError(f"Missing or invalid '{key}' in {context}")
    return value


@dataclass(frozen=True)
class SongInfo:
    """A song search hit: duration in seconds and the song hash."""

    duration: int
    hash: str

    @classmethod
    def from_dict(cls, data: Any) -> "SongInfo":
        return cls(
            duration=_require(data, "duration", int, "song info"),
            hash=_require(data, "hash", str, "song info"),
        )


@dataclass(frozen=True)
class KugouCandidate:
    """A downloadable lyric resource."""

    id: str
    access_key: str
    duration: int

    @classmethod
    def from_dict(cls, data: Any) -> "KugouCandidate":
        raw_id = _require(data, "id", (str, int), "lyrics candidate")
        return cls(
            id=str(raw_id),
            access_key=_require(data, "accesskey", str, "lyrics candidate"),
            duration=_require(data, "duration", int, "lyrics candidate"),
        )


def _object_list(container: Any, key: str) -> List[Any]:
    """Get ``container[key]`` as a list; absent or null levels give []."""
    if container is None:
        return []
    if not isinstance(container, dict):
        raise ParseError(f"Expected an object around '{key}'")
    value = container.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(f"Expected a list at '{key}'")
    return value


def decode_content(content: str) -> str:
    """Decode a base64 LRC body into text."""
    try:
        raw = base64.b64decode(content, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64 lyrics content: {e}") from e
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Lyrics content is not valid UTF-8: {e}") from e


class KugouProvider(LyricsProvider):
    """Hash/token backend; always yields LRC text."""

    name = "kugou"
    supports_plain = False

    async def search_songs(self, keyword: str) -> List[SongInfo]:
        params = {
            "version": "9108",
            "plat": "0",
            "pagesize": "8",
            "showtype": "0",
            "keyword": keyword,
        }
        data = await fetch_json(
            self.client, config.KUGOU_SONG_SEARCH_URL, params=params,
            context="kugou song search",
        )
        if not isinstance(data, dict):
            raise ParseError("Expected an object from kugou song search")
        info = _object_list(data.get("data"), "info")
        return [SongInfo.from_dict(entry) for entry in info]

    async def _search_lyrics(self, params: dict, context: str) -> List[KugouCandidate]:
        # The search endpoint does not send a JSON content type
        text = await fetch_text(
            self.client,
            config.KUGOU_LYRICS_SEARCH_URL,
            params={**_BASE_PARAMS, "client": "mobi", **params},
        )
        data = parse_json_from_text(text, context)
        return [KugouCandidate.from_dict(entry) for entry in _object_list(data, "candidates")]

    async def search_lyrics_by_hash(self, song_hash: str) -> List[KugouCandidate]:
        return await self._search_lyrics({"hash": song_hash}, "kugou lyrics search by hash")

    async def search_lyrics_by_keyword(self, keyword: str) -> List[KugouCandidate]:
        return await self._search_lyrics({"keyword": keyword}, "kugou lyrics search by keyword")

    async def download_lyrics(self, candidate: KugouCandidate) -> str:
        """Download, decode and clean one candidate's LRC text."""
        params = {
            **_BASE_PARAMS,
            "client": "pc",
            "fmt": "lrc",
            "id": candidate.id,
            "accesskey": candidate.access_key,
        }
        data = await fetch_json(
            self.client, config.KUGOU_LYRICS_DOWNLOAD_URL, params=params,
            context="kugou lyrics download",
        )
        content = _require(data, "content", str, "lyrics download")
        return strip_lrc_header(decode_content(content))

    async def find_candidate(self, query: Query, keyword: str) -> Optional[KugouCandidate]:
        """Find the lyric candidate to download, or None."""
        songs = await self.search_songs(keyword)
        target = query.duration_seconds

        if songs:
            for tolerance in range(config.KUGOU_MAX_TOLERANCE + 1):
                for song in songs:
                    if target - tolerance <= song.duration <= target + tolerance:
                        candidates = await self.search_lyrics_by_hash(song.hash)
                        if candidates:
                            logger.debug(
                                f"KuGou duration match: {song.duration}s "
                                f"(target {target}s, tolerance {tolerance}s)"
                            )
                            return candidates[0]

        logger.debug("KuGou: no duration match, searching lyrics by keyword")
        candidates = await self.search_lyrics_by_keyword(keyword)
        return candidates[0] if candidates else None

    async def resolve(self, query: Query, synced: bool = True) -> Optional[LyricsResult]:
        if not synced:
            logger.debug("KuGou only serves synced lyrics; skipping plain request")
            return None

        keyword = build_keyword(query.artist, query.title)
        logger.debug(f"KuGou search keyword: {keyword}")

        candidate = await self.find_candidate(query, keyword)
        if candidate is None:
            return None

        text = await self.download_lyrics(candidate)
        if parse_lrc(text) is None:
            logger.warning(f"KuGou candidate {candidate.id} has no usable LRC lines")
            return None
        return LyricsResult(text=text, synced=True, source=self.name)
