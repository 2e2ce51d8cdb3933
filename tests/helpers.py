from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx

from moodmusic.config import Settings
from moodmusic.core.errors import LookupDegraded
from moodmusic.services.video_search_service import VideoSearchStrategy

PLACEHOLDER = "https://example.test/placeholder.png"


class FakeUpstream:
    """Programmable stand-in for the Mistral and Last.fm HTTP APIs"""

    def __init__(self) -> None:
        self.completion = ""
        self.mistral_status = 200
        self.mistral_error: Optional[Exception] = None
        self.lastfm: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"error": 6, "message": "not found"}
        )
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.mistral.test":
            if self.mistral_error is not None:
                raise self.mistral_error
            if self.mistral_status != 200:
                return httpx.Response(self.mistral_status, json={"message": "upstream failure"})
            return httpx.Response(
                200,
                json={"choices": [{"message": {"role": "assistant", "content": self.completion}}]},
            )
        if request.url.host == "lastfm.test":
            return self.lastfm(request)
        return httpx.Response(404)

    def mistral_payloads(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.url.host == "api.mistral.test"]


class FakeVideoStrategy(VideoSearchStrategy):
    """Maps queries to video IDs; unknown queries have no results"""

    def __init__(self) -> None:
        self.videos: dict[str, str] = {}
        self.failing: set[str] = set()
        self.calls: list[str] = []

    async def find_video_id(self, query: str) -> Optional[str]:
        self.calls.append(query)
        if query in self.failing:
            raise LookupDegraded(f"search failed: {query}")
        return self.videos.get(query)


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "DATABASE_URL": "sqlite://",
        "REDIS_URL": "",
        "SECRET_KEY": "test-secret",
        "MISTRAL_API_KEY": "test-key",
        "MISTRAL_API_URL": "https://api.mistral.test/v1/chat/completions",
        "LASTFM_API_KEY": "",
        "LASTFM_API_URL": "https://lastfm.test/2.0/",
        "DEFAULT_ARTWORK_URL": PLACEHOLDER,
        "CORS_ORIGINS": ["http://localhost:5173"],
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def register(client, username: str, email: Optional[str] = None, password: str = "hunter22") -> dict:
    response = client.post(
        "/api/auth/register",
        json={"username": username, "email": email or f"{username}@example.com", "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def song_payload(title: str = "Happy", artist: str = "Pharrell Williams", **overrides: str) -> dict[str, str]:
    payload = {
        "songTitle": title,
        "artist": artist,
        "youtubeLink": f"https://www.youtube.com/watch?v={title.lower().replace(' ', '')}",
        "mood": "happy",
        "language": "English",
        "genre": "pop",
    }
    payload.update(overrides)
    return payload
