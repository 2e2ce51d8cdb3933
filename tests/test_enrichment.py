from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx
import pytest

from moodmusic.core.cache import RedisCache
from moodmusic.core.lastfm_client import LastFMClient
from moodmusic.services.artwork_service import ArtworkService, pick_image
from moodmusic.services.video_search_service import VideoSearchService
from moodmusic.core.errors import LookupDegraded
from tests.helpers import PLACEHOLDER, FakeVideoStrategy


class MemoryCache(RedisCache):
    def __init__(self) -> None:
        super().__init__("")
        self.values: dict[str, Any] = {}

    def get_cache(self, key: str) -> Optional[Any]:
        return self.values.get(key)

    def set_cache(self, key: str, value: Any, expire: int = None) -> bool:
        self.values[key] = value
        return True


def images(**sizes: str) -> list[dict[str, str]]:
    return [{"size": size, "#text": url} for size, url in sizes.items()]


def artwork_service(handler, api_key: str = "key", cache: Optional[RedisCache] = None) -> ArtworkService:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    client = LastFMClient(http_client, api_key, api_url="https://lastfm.test/2.0/")
    return ArtworkService(client, placeholder_url=PLACEHOLDER, cache=cache)


def test_pick_image_prefers_extralarge_then_large() -> None:
    assert pick_image(images(small="s", large="l", extralarge="xl")) == "xl"
    assert pick_image(images(small="s", large="l", extralarge="")) == "l"
    assert pick_image(images(small="s", medium="m")) == "s"
    assert pick_image(images(small="")) is None
    assert pick_image([]) is None
    assert pick_image(["oops", {"size": "large", "#text": "l"}]) == "l"


def test_artwork_prefers_album_image() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["method"] == "track.getInfo"
        assert request.url.params["artist"] == "Coldplay"
        assert request.url.params["track"] == "Yellow"
        return httpx.Response(200, json={"track": {"album": {"image": images(large="album-l", extralarge="album-xl")}}})

    service = artwork_service(handler)

    assert asyncio.run(service.find_image("Coldplay", "Yellow")) == "album-xl"


def test_artwork_falls_back_to_artist_image() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.params["method"] == "track.getInfo":
            return httpx.Response(200, json={"error": 6, "message": "Track not found"})
        return httpx.Response(200, json={"artist": {"image": images(medium="artist-m", large="artist-l")}})

    service = artwork_service(handler)

    assert asyncio.run(service.find_image("Coldplay", "Unknown Song")) == "artist-l"


def test_artwork_falls_back_to_placeholder() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"artist": {"image": images(small="")}})

    service = artwork_service(handler)

    assert asyncio.run(service.find_image("Nobody", "Nothing")) == PLACEHOLDER


def test_artwork_errors_degrade_to_placeholder() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    service = artwork_service(handler)

    assert asyncio.run(service.find_image("Coldplay", "Yellow")) == PLACEHOLDER


def test_artwork_without_api_key_makes_no_requests() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    service = artwork_service(handler, api_key="")

    assert asyncio.run(service.find_image("Coldplay", "Yellow")) == PLACEHOLDER
    assert calls == []


def test_artwork_is_cached() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"track": {"album": {"image": images(extralarge="xl")}}})

    service = artwork_service(handler, cache=MemoryCache())

    asyncio.run(service.find_image("Coldplay", "Yellow"))
    assert asyncio.run(service.find_image("Coldplay", "Yellow")) == "xl"
    assert len(calls) == 1


def test_video_search_builds_watch_url_and_caches() -> None:
    strategy = FakeVideoStrategy()
    strategy.videos = {"Yellow - Coldplay": "yKNxeF4KMsY"}
    service = VideoSearchService(strategy, cache=MemoryCache())

    first = asyncio.run(service.find_watch_url("Yellow - Coldplay"))
    second = asyncio.run(service.find_watch_url("Yellow - Coldplay"))

    assert first == second == "https://www.youtube.com/watch?v=yKNxeF4KMsY"
    assert strategy.calls == ["Yellow - Coldplay"]


def test_video_search_misses_are_not_cached() -> None:
    strategy = FakeVideoStrategy()
    cache = MemoryCache()
    service = VideoSearchService(strategy, cache=cache)

    assert asyncio.run(service.find_watch_url("Nothing - Nobody")) is None
    assert cache.values == {}


def test_video_search_errors_propagate_as_lookup_degraded() -> None:
    strategy = FakeVideoStrategy()
    strategy.failing = {"Yellow - Coldplay"}
    service = VideoSearchService(strategy)

    with pytest.raises(LookupDegraded):
        asyncio.run(service.find_watch_url("Yellow - Coldplay"))


def test_cache_without_url_is_disabled() -> None:
    cache = RedisCache("")

    assert not cache.enabled
    assert cache.set_cache("key", "value") is False
    assert cache.get_cache("key") is None


def test_unreachable_redis_disables_cache() -> None:
    cache = RedisCache("redis://127.0.0.1:1/0")

    assert not cache.enabled
    assert cache.get_cache("key") is None


def test_non_object_lastfm_reply_is_a_degraded_lookup() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[])

    client = LastFMClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)), "key")

    with pytest.raises(LookupDegraded):
        asyncio.run(client.get_track_images("Coldplay", "Yellow"))
    assert asyncio.run(artwork_service(handler).find_image("Coldplay", "Yellow")) == PLACEHOLDER
