"""Lyrics resolution across providers.

Providers are tried in order. "Not found" from one provider moves on to the
next; an error from any provider aborts the whole resolution.
"""

from typing import Dict, List, Optional, Sequence

import httpx

from .. import config
from ..exceptions import ConfigError
from ..utils.logging import get_logger
from ..utils.validation import (
    validate_duration,
    validate_provider_name,
    validate_query_text,
)
from .http import create_http_client
from .models import LyricsResult, Query
from .providers import PROVIDERS, LyricsProvider

logger = get_logger(__name__)


class LyricsResolver:
    """
    Resolve lyrics using a shared HTTP client and an ordered provider list.

    Use as an async context manager so an internally created client is
    closed; a client passed in by the caller is left open.

    Example:
        async with LyricsResolver() as resolver:
            result = await resolver.resolve("Queen", "Bohemian Rhapsody", 354000)
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        providers: Optional[Dict[str, LyricsProvider]] = None,
        provider_order: Optional[Sequence[str]] = None,
    ):
        self._owns_client = client is None
        self.client = client or create_http_client()

        if providers is None:
            providers = {name: cls(self.client) for name, cls in PROVIDERS.items()}
        self.providers = providers

        if provider_order is None:
            provider_order = config.get_provider_order()
        self.provider_order: List[str] = [
            validate_provider_name(name) for name in provider_order
        ]

    async def __aenter__(self) -> "LyricsResolver":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    def get_provider(self, name: str) -> LyricsProvider:
        name = validate_provider_name(name)
        try:
            return self.providers[name]
        except KeyError:
            raise ConfigError(f"Provider not configured: {name}") from None

    @staticmethod
    def build_query(
        artist: str, title: str, duration_ms: int, album: Optional[str] = None
    ) -> Query:
        return Query(
            artist=validate_query_text(artist, "artist"),
            title=validate_query_text(title, "title"),
            duration_ms=validate_duration(duration_ms),
            album=album or None,
        )

    async def resolve_with(
        self,
        name: str,
        artist: str,
        title: str,
        duration_ms: int,
        synced: bool = True,
        album: Optional[str] = None,
    ) -> Optional[LyricsResult]:
        """Resolve with a single provider."""
        provider = self.get_provider(name)
        query = self.build_query(artist, title, duration_ms, album)
        return await provider.resolve(query, synced=synced)

    async def resolve(
        self,
        artist: str,
        title: str,
        duration_ms: int,
        synced: bool = True,
        album: Optional[str] = None,
        providers: Optional[Sequence[str]] = None,
    ) -> Optional[LyricsResult]:
        """
        Resolve lyrics, falling back through providers.

        Args:
            artist: Artist name (may list several artists)
            title: Track title, optionally with a "(feat. X)" clause
            duration_ms: Track duration in milliseconds
            synced: Request LRC lyrics instead of plain text
            album: Optional album name to narrow the search
            providers: Provider names to try, overriding the configured order

        Returns:
            LyricsResult, or None if no provider has lyrics for the track

        Raises:
            ValidationError: If the query is malformed
            TransportError, ParseError: If any backend request fails
        """
        query = self.build_query(artist, title, duration_ms, album)
        order = (
            [validate_provider_name(name) for name in providers]
            if providers
            else self.provider_order
        )

        for name in order:
            provider = self.get_provider(name)
            if not synced and not provider.supports_plain:
                logger.debug(f"Skipping {name}: no plain lyrics")
                continue

            result = await provider.resolve(query, synced=synced)
            if result is not None:
                logger.info(f"Found {'synced' if synced else 'plain'} lyrics from {name}")
                return result
            logger.info(f"No lyrics from {name} for {query.artist} - {query.title}")

        return None


async def resolve_lyrics(
    artist: str,
    title: str,
    duration_ms: int,
    synced: bool = True,
    album: Optional[str] = None,
    providers: Optional[Sequence[str]] = None,
) -> Optional[LyricsResult]:
    """Resolve lyrics with a short-lived resolver. See LyricsResolver.resolve."""
    async with LyricsResolver() as resolver:
        return await resolver.resolve(
            artist, title, duration_ms, synced=synced, album=album, providers=providers
        )
