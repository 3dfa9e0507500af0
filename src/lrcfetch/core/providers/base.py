"""Common interface for lyrics backends."""

from typing import Optional

import httpx

from ..models import LyricsResult, Query


class LyricsProvider:
    """A backend that can resolve a Query to lyrics.

    ``resolve`` returns None when the backend has nothing matching and
    raises an ``LrcFetchError`` when a request or response is broken.
    """

    name = ""
    supports_plain = True

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def resolve(self, query: Query, synced: bool = True) -> Optional[LyricsResult]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
