from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from moodmusic.config import Settings
from moodmusic.core.cache import RedisCache
from moodmusic.core.container import ServiceContainer
from moodmusic.main import create_app
from moodmusic.services.video_search_service import VideoSearchService
from tests.helpers import FakeUpstream, FakeVideoStrategy, make_settings


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def video_strategy() -> FakeVideoStrategy:
    return FakeVideoStrategy()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def container(
    settings: Settings, upstream: FakeUpstream, video_strategy: FakeVideoStrategy
) -> ServiceContainer:
    return ServiceContainer.from_settings(
        settings,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler)),
        cache=RedisCache(""),
        video_search=VideoSearchService(video_strategy),
    )


@pytest.fixture
def client(settings: Settings, container: ServiceContainer) -> Iterator[TestClient]:
    with TestClient(create_app(settings, container)) as test_client:
        yield test_client
