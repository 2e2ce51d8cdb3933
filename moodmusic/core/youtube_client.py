# ============================================================================
# FILE: moodmusic/core/youtube_client.py
# YouTube Data API v3 client used for video search when an API key is set
# ============================================================================
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from typing import Optional
import threading
from moodmusic.core.errors import LookupDegraded
import logging

logger = logging.getLogger(__name__)


class YouTubeClient:
    """
    YouTube Data API v3 client for video search
    """

    def __init__(self, api_key: str, service_name: str = "youtube", api_version: str = "v3"):
        """Initialize YouTube API client"""
        self.api_key = api_key
        self.service_name = service_name
        self.api_version = api_version
        # httplib2 transports are not thread-safe; one resource per executor thread
        self._local = threading.local()

    @property
    def youtube(self):
        youtube = getattr(self._local, "youtube", None)
        if youtube is None:
            youtube = build(
                self.service_name,
                self.api_version,
                developerKey=self.api_key,
                cache_discovery=False,
            )
            self._local.youtube = youtube
            logger.info(f"YouTube API client initialized for thread {threading.get_ident()}")
        return youtube

    def search_video_id(self, query: str) -> Optional[str]:
        """
        Search for a video and return the first result's ID

        Args:
            query: Free-text search query ("Title - Artist")

        Returns:
            Video ID or None when the search returned no items

        Raises:
            LookupDegraded: on API errors (quota, invalid key, network)
        """
        try:
            response = self.youtube.search().list(
                q=query,
                part="id",
                type="video",
                maxResults=1
            ).execute()
        except HttpError as e:
            logger.warning(f"YouTube API error for '{query}': {e}")
            raise LookupDegraded(f"YouTube search failed: {query}") from e
        except Exception as e:
            logger.warning(f"Error searching YouTube: {str(e)[:100]}")
            raise LookupDegraded(f"YouTube search failed: {query}") from e

        for item in response.get("items", []):
            video_id = item.get("id", {}).get("videoId")
            if video_id:
                return video_id
        return None
