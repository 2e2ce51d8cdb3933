# ============================================================================
# FILE: moodmusic/core/lastfm_client.py
# Last.fm API client for album / artist artwork
# ============================================================================
import logging
from typing import Dict, List, Optional

import httpx

from moodmusic.core.errors import LookupDegraded

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://ws.audioscrobbler.com/2.0/"


class LastFMClient:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: Optional[float] = 10.0,
    ):
        self.http_client = http_client
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _call(self, method: str, **params) -> Dict:
        params.update({"method": method, "api_key": self.api_key, "format": "json"})
        try:
            response = await self.http_client.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise LookupDegraded(f"Last.fm {method} failed") from e
        if not isinstance(data, dict):
            raise LookupDegraded(f"Last.fm {method} returned {type(data).__name__}, expected an object")
        return data

    async def get_track_images(self, artist: str, track: str) -> List[Dict]:
        """Album images for a track (empty when Last.fm has none)"""
        data = await self._call("track.getInfo", artist=artist, track=track)
        track_info = data.get("track")
        album = track_info.get("album") if isinstance(track_info, dict) else None
        images = album.get("image") if isinstance(album, dict) else None
        return images if isinstance(images, list) else []

    async def get_artist_images(self, artist: str) -> List[Dict]:
        """Artist images (empty when Last.fm has none)"""
        data = await self._call("artist.getInfo", artist=artist)
        artist_info = data.get("artist")
        images = artist_info.get("image") if isinstance(artist_info, dict) else None
        return images if isinstance(images, list) else []
