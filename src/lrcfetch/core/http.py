"""
HTTP fetching for lyrics backends.

This module intentionally contains only network logic:
- one shared async client
- status/transport error mapping
- retries with backoff for transient failures

No provider-specific semantics.
"""

import json
from typing import Any, Mapping, Optional

import httpx

from .. import config
from ..exceptions import ParseError, TransportError
from ..utils.logging import get_logger
from ..utils.retry import retry_request

logger = get_logger(__name__)


class _TransientError(TransportError):
    """Transport failure that may succeed on a second attempt."""
    pass


def create_http_client(
    headers: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create the async client shared by all providers of one resolver.

    The client pools connections and is safe to use from concurrent tasks.
    """
    default_headers = {"User-Agent": config.USER_AGENT}
    if headers:
        default_headers.update(headers)

    return httpx.AsyncClient(
        headers=default_headers,
        timeout=timeout if timeout is not None else config.HTTP_TIMEOUT,
        follow_redirects=True,
        transport=transport,
    )


async def _get_once(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Mapping[str, Any]],
    headers: Optional[Mapping[str, str]],
) -> httpx.Response:
    try:
        response = await client.get(url, params=params, headers=headers)
    except httpx.TransportError as e:
        raise _TransientError(f"Request to {url} failed: {e}") from e
    except httpx.RequestError as e:
        # Undecodable bodies, redirect loops: retrying will not help
        raise TransportError(f"Request to {url} failed: {e}") from e

    if response.status_code in config.TRANSIENT_STATUS_CODES:
        raise _TransientError(
            f"{url} returned HTTP {response.status_code}",
            status_code=response.status_code,
        )
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise TransportError(
            f"{url} returned HTTP {response.status_code}",
            status_code=response.status_code,
        ) from e
    return response


async def _get(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> httpx.Response:
    try:
        return await retry_request(
            _get_once,
            client,
            url,
            params,
            headers,
            max_retries=config.MAX_RETRIES,
            base_delay=config.RETRY_DELAY,
            exceptions=(_TransientError,),
        )
    except _TransientError as e:
        # Callers only ever see the public error type
        raise TransportError(str(e), status_code=e.status_code) from e


def parse_json_from_text(text: str, context: str) -> Any:
    """
    Parse a JSON document.

    Args:
        text: Raw response body
        context: Short label for log messages (e.g. "kugou song search")

    Raises:
        ParseError: If the body is not valid JSON
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse JSON for {context}: {e}")
        raise ParseError(f"Invalid JSON from {context}: {e}") from e


async def fetch_text(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> str:
    """GET a URL and return the response body as text."""
    response = await _get(client, url, params=params, headers=headers)
    return response.text


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
    context: str = "",
) -> Any:
    """GET a URL and parse the response body as JSON."""
    text = await fetch_text(client, url, params=params, headers=headers)
    return parse_json_from_text(text, context or url)
