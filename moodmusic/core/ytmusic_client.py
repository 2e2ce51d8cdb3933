# ============================================================================
# FILE: moodmusic/core/ytmusic_client.py
# ============================================================================
from ytmusicapi import YTMusic
from typing import Dict, List, Optional
from moodmusic.core.errors import LookupDegraded
import logging

logger = logging.getLogger(__name__)

class YTMusicClient:
    """Wrapper for the YTMusic search API (no API key required)"""

    def __init__(self, ytmusic: Optional[YTMusic] = None):
        self._ytmusic = ytmusic

    @property
    def ytmusic(self) -> YTMusic:
        # Created lazily so building the app never touches the network
        if self._ytmusic is None:
            self._ytmusic = YTMusic()
        return self._ytmusic

    def search(self, query: str, limit: int = 5) -> List[Dict]:
        """
        Search YouTube Music, songs first, falling back to plain videos

        Raises:
            LookupDegraded: when the YTMusic API call fails
        """
        try:
            results = self.ytmusic.search(query, filter="songs", limit=limit)
            if not results:
                results = self.ytmusic.search(query, filter="videos", limit=limit)
            return results or []
        except Exception as e:
            logger.warning(f"YTMusic search error for '{query}': {str(e)[:100]}")
            raise LookupDegraded(f"YTMusic search failed: {query}") from e

    def search_video_id(self, query: str) -> Optional[str]:
        """Return the first result's video ID, or None when nothing matched"""
        for result in self.search(query):
            video_id = result.get("videoId")
            if video_id:
                return video_id
        return None
