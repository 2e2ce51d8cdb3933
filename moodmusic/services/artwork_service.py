# ============================================================================
# FILE: moodmusic/services/artwork_service.py
# ============================================================================
import logging
from typing import Dict, List, Optional

from moodmusic.core.cache import RedisCache
from moodmusic.core.errors import LookupDegraded
from moodmusic.core.lastfm_client import LastFMClient

logger = logging.getLogger(__name__)

SIZE_PREFERENCE = ("extralarge", "large")


def pick_image(images: List[Dict]) -> Optional[str]:
    """Largest available image URL: extralarge, then large, then the first entry"""
    images = [image for image in images if isinstance(image, dict)]
    by_size = {image.get("size"): image.get("#text") for image in images}
    for size in SIZE_PREFERENCE:
        if by_size.get(size):
            return by_size[size]
    if images and images[0].get("#text"):
        return images[0]["#text"]
    return None


class ArtworkService:
    """
    Cover art for a song.

    Album art for the track is preferred, then the artist's image, then a
    fixed placeholder. Never raises: a failed lookup yields the placeholder.
    """

    def __init__(
        self,
        client: LastFMClient,
        placeholder_url: str,
        cache: Optional[RedisCache] = None,
        cache_ttl: int = 86400,
    ):
        self.client = client
        self.placeholder_url = placeholder_url
        self.cache = cache
        self.cache_ttl = cache_ttl

    async def find_image(self, artist: str, track: str) -> str:
        if not self.client.configured or not artist:
            return self.placeholder_url

        cache_key = f"artwork:{artist.lower()}:{track.lower()}"
        if self.cache:
            cached = self.cache.get_cache(cache_key)
            if cached:
                return cached

        try:
            image = pick_image(await self.client.get_track_images(artist, track))
            if not image:
                image = pick_image(await self.client.get_artist_images(artist))
        except LookupDegraded as e:
            logger.warning(f"Artwork lookup failed for {artist} - {track}: {e}")
            return self.placeholder_url

        if not image:
            return self.placeholder_url

        if self.cache:
            self.cache.set_cache(cache_key, image, self.cache_ttl)
        return image
