from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import SQLAlchemyError

from moodmusic.core.container import ServiceContainer
from moodmusic.main import create_app
from moodmusic.services.video_search_service import YouTubeDataApiStrategy, YTMusicSearchStrategy
from tests.helpers import make_settings


def test_unreachable_database_aborts_startup(tmp_path) -> None:
    settings = make_settings(DATABASE_URL=f"sqlite:///{tmp_path}/missing/dir/app.db")

    with pytest.raises(SQLAlchemyError):
        with TestClient(create_app(settings)):
            pass


def test_lifespan_builds_container_from_settings() -> None:
    app = create_app(make_settings())

    with TestClient(app) as client:
        assert isinstance(app.state.container, ServiceContainer)
        assert client.get("/health").status_code == 200


def test_video_search_uses_ytmusic_without_api_key() -> None:
    container = ServiceContainer.from_settings(make_settings(YOUTUBE_API_KEY=""))

    strategy = container.recommendation_service.video_search.strategy
    assert isinstance(strategy, YTMusicSearchStrategy)


def test_video_search_uses_data_api_with_key() -> None:
    container = ServiceContainer.from_settings(make_settings(YOUTUBE_API_KEY="yt-key"))

    strategy = container.recommendation_service.video_search.strategy
    assert isinstance(strategy, YouTubeDataApiStrategy)
    assert strategy.client.api_key == "yt-key"
