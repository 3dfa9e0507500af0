import asyncio

import httpx
import pytest

from lrcfetch import config
from lrcfetch.core import resolver as resolver_module
from lrcfetch.core.models import LyricsResult
from lrcfetch.core.resolver import LyricsResolver, resolve_lyrics
from lrcfetch.exceptions import ConfigError, TransportError, ValidationError


class FakeProvider:
    def __init__(self, name, result=None, error=None, supports_plain=True):
        self.name = name
        self.result = result
        self.error = error
        self.supports_plain = supports_plain
        self.queries = []

    async def resolve(self, query, synced=True):
        self.queries.append((query, synced))
        if self.error:
            raise self.error
        return self.result


def run_resolver(fake_providers, order, make_client, **kwargs):
    async def go():
        async with make_client(lambda request: httpx.Response(500)) as client:
            resolver = LyricsResolver(
                client=client,
                providers={p.name: p for p in fake_providers},
                provider_order=order,
            )
            return await resolver.resolve(**kwargs)
    return asyncio.run(go())


QUERY = dict(artist="Artist", title="Title", duration_ms=200_000)


def test_first_provider_hit_wins(make_client):
    lrclib = FakeProvider("lrclib", LyricsResult("[00:01.00]a", True, "lrclib"))
    kugou = FakeProvider("kugou", LyricsResult("[00:01.00]b", True, "kugou"))

    result = run_resolver([lrclib, kugou], ["lrclib", "kugou"], make_client, **QUERY)

    assert result.source == "lrclib"
    assert kugou.queries == []


def test_not_found_falls_through_to_next_provider(make_client):
    lrclib = FakeProvider("lrclib", None)
    kugou = FakeProvider("kugou", LyricsResult("[00:01.00]b", True, "kugou"))

    result = run_resolver([lrclib, kugou], ["lrclib", "kugou"], make_client, **QUERY)

    assert result.source == "kugou"
    assert len(lrclib.queries) == 1


def test_all_not_found_returns_none(make_client):
    providers = [FakeProvider("lrclib"), FakeProvider("kugou")]
    assert run_resolver(providers, ["lrclib", "kugou"], make_client, **QUERY) is None


def test_error_aborts_resolution(make_client):
    lrclib = FakeProvider("lrclib", error=TransportError("boom", status_code=500))
    kugou = FakeProvider("kugou", LyricsResult("[00:01.00]b", True, "kugou"))

    with pytest.raises(TransportError):
        run_resolver([lrclib, kugou], ["lrclib", "kugou"], make_client, **QUERY)
    assert kugou.queries == []


def test_plain_request_skips_synced_only_provider(make_client):
    kugou = FakeProvider("kugou", supports_plain=False)
    lrclib = FakeProvider("lrclib", LyricsResult("words", False, "lrclib"))

    result = run_resolver(
        [kugou, lrclib], ["kugou", "lrclib"], make_client, synced=False, **QUERY
    )

    assert result.text == "words"
    assert kugou.queries == []
    assert lrclib.queries[0][1] is False


def test_per_call_provider_order(make_client):
    lrclib = FakeProvider("lrclib", LyricsResult("a", True, "lrclib"))
    kugou = FakeProvider("kugou", LyricsResult("b", True, "kugou"))

    result = run_resolver(
        [lrclib, kugou], ["lrclib", "kugou"], make_client, providers=["KuGou"], **QUERY
    )

    assert result.source == "kugou"
    assert lrclib.queries == []


def test_query_is_built_from_arguments(make_client):
    lrclib = FakeProvider("lrclib")
    run_resolver([lrclib], ["lrclib"], make_client, album="Album", **QUERY)

    query, synced = lrclib.queries[0]
    assert (query.artist, query.title, query.duration_ms) == ("Artist", "Title", 200_000)
    assert query.album == "Album"
    assert synced is True


@pytest.mark.parametrize(
    "override",
    [{"artist": " "}, {"title": ""}, {"duration_ms": -1}, {"duration_ms": 1.5}],
)
def test_invalid_query_raises_before_any_request(make_client, override):
    lrclib = FakeProvider("lrclib")
    with pytest.raises(ValidationError):
        run_resolver([lrclib], ["lrclib"], make_client, **{**QUERY, **override})
    assert lrclib.queries == []


def test_unknown_provider_name_raises(make_client):
    with pytest.raises(ValidationError):
        run_resolver([FakeProvider("lrclib")], ["genius"], make_client, **QUERY)


def test_unconfigured_provider_raises(make_client):
    with pytest.raises(ConfigError):
        run_resolver([FakeProvider("lrclib")], ["kugou"], make_client, **QUERY)


def test_resolve_with_single_provider(make_client):
    lrclib = FakeProvider("lrclib", LyricsResult("a", True, "lrclib"))
    kugou = FakeProvider("kugou", LyricsResult("b", True, "kugou"))

    async def go():
        async with make_client(lambda request: httpx.Response(500)) as client:
            resolver = LyricsResolver(client=client, providers={"lrclib": lrclib, "kugou": kugou})
            return await resolver.resolve_with("kugou", "Artist", "Title", 200_000)

    assert asyncio.run(go()).source == "kugou"
    assert lrclib.queries == []


def test_default_order_comes_from_config(monkeypatch, make_client):
    monkeypatch.setenv("LRCFETCH_PROVIDERS", "kugou")

    async def go():
        async with make_client(lambda request: httpx.Response(500)) as client:
            return LyricsResolver(client=client).provider_order

    assert asyncio.run(go()) == ["kugou"]


def test_borrowed_client_is_left_open(make_client):
    async def go():
        client = make_client(lambda request: httpx.Response(500))
        async with LyricsResolver(client=client):
            pass
        closed = client.is_closed
        await client.aclose()
        return closed

    assert asyncio.run(go()) is False


def test_owned_client_is_closed():
    async def go():
        async with LyricsResolver() as resolver:
            client = resolver.client
        return client.is_closed

    assert asyncio.run(go()) is True


def test_end_to_end_prefers_exact_duration(monkeypatch, make_client):
    """Rick Astley: exact duration beats exact title on LrcLib."""
    synced_212 = "[00:18.80]We're no strangers to love"
    synced_200 = "[00:10.00]Wrong version"
    tracks = [
        {
            "id": 1, "trackName": "Never Gonna Give You Up (Live at the BBC)",
            "artistName": "Rick Astley", "duration": 212.0,
            "plainLyrics": "plain", "syncedLyrics": synced_212,
        },
        {
            "id": 2, "trackName": "Never Gonna Give You Up (feat. Nobody)",
            "artistName": "Rick Astley", "duration": 200.0,
            "plainLyrics": "plain", "syncedLyrics": synced_200,
        },
    ]

    def handler(request):
        assert request.url.path == "/api/search"
        return httpx.Response(200, json=tracks)

    monkeypatch.setattr(
        resolver_module, "create_http_client", lambda: make_client(handler)
    )
    monkeypatch.setattr(config, "LRCLIB_BASE_URL", "https://lrclib.test")

    result = asyncio.run(resolve_lyrics(
        "Rick Astley", "Never Gonna Give You Up (feat. Nobody)", 212_000,
        providers=["lrclib"],
    ))

    assert result.text == synced_212
    assert result.synced is True
    assert result.source == "lrclib"
