# ============================================================================
# FILE: moodmusic/services/video_search_service.py
# Video lookup with Strategy Pattern
# Supports: YTMusic search (no key), YouTube Data API (key configured)
# ============================================================================
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from moodmusic.core.cache import RedisCache
from moodmusic.core.youtube_client import YouTubeClient
from moodmusic.core.ytmusic_client import YTMusicClient

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


# ============================================================================
# STRATEGY PATTERN: Video Search Interface
# ============================================================================

class VideoSearchStrategy(ABC):
    """Abstract base class for video search providers"""

    @abstractmethod
    async def find_video_id(self, query: str) -> Optional[str]:
        """Return the first matching video ID, None when nothing matched.
        Raises LookupDegraded on provider errors."""


class YTMusicSearchStrategy(VideoSearchStrategy):
    """YouTube Music search, blocking client run in the default executor"""

    def __init__(self, client: Optional[YTMusicClient] = None):
        self.client = client or YTMusicClient()

    async def find_video_id(self, query: str) -> Optional[str]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.client.search_video_id, query)


class YouTubeDataApiStrategy(VideoSearchStrategy):
    """YouTube Data API v3 search, blocking client run in the default executor"""

    def __init__(self, client: YouTubeClient):
        self.client = client

    async def find_video_id(self, query: str) -> Optional[str]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.client.search_video_id, query)


# ============================================================================
# MAIN SERVICE CLASS
# ============================================================================

class VideoSearchService:
    """Resolves "Title - Artist" strings to canonical watch URLs"""

    def __init__(self, strategy: VideoSearchStrategy, cache: Optional[RedisCache] = None, cache_ttl: int = 86400):
        self.strategy = strategy
        self.cache = cache
        self.cache_ttl = cache_ttl

    @classmethod
    def from_api_key(cls, youtube_api_key: str = "", cache: Optional[RedisCache] = None, **kwargs) -> "VideoSearchService":
        # Choose strategy based on API key availability
        if youtube_api_key:
            logger.info("[VideoSearch] API key configured - using YouTube Data API")
            strategy = YouTubeDataApiStrategy(YouTubeClient(youtube_api_key))
        else:
            logger.info("[VideoSearch] No API key - using YTMusic search")
            strategy = YTMusicSearchStrategy()
        return cls(strategy, cache=cache, **kwargs)

    async def find_watch_url(self, query: str) -> Optional[str]:
        """
        Watch URL of the first search result, or None for an empty result set.
        Provider errors propagate as LookupDegraded.
        """
        cache_key = f"video:{query.lower()}"
        if self.cache:
            cached = self.cache.get_cache(cache_key)
            if cached:
                logger.info(f"Video cache hit: {query}")
                return cached

        video_id = await self.strategy.find_video_id(query)
        if not video_id:
            return None

        url = WATCH_URL.format(video_id=video_id)
        if self.cache:
            self.cache.set_cache(cache_key, url, self.cache_ttl)
        return url
