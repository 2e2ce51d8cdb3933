# ============================================================================
# FILE: moodmusic/core/container.py
# Process-scoped clients, built at startup and released at shutdown
# ============================================================================
import logging
from datetime import timedelta
from typing import Optional

import httpx
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from moodmusic.config import Settings
from moodmusic.core.cache import RedisCache
from moodmusic.core.lastfm_client import LastFMClient
from moodmusic.core.mistral_client import MistralClient
from moodmusic.core.security import TokenService
from moodmusic.db.base import Base
from moodmusic.db.session import create_db_engine, create_session_factory
from moodmusic.services.artwork_service import ArtworkService
from moodmusic.services.recommendation_service import RecommendationService
from moodmusic.services.video_search_service import VideoSearchService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Explicitly constructed dependencies shared by every request"""

    def __init__(
        self,
        settings: Settings,
        engine: Engine,
        session_factory: sessionmaker,
        cache: RedisCache,
        http_client: httpx.AsyncClient,
        token_service: TokenService,
        recommendation_service: RecommendationService,
    ):
        self.settings = settings
        self.engine = engine
        self.session_factory = session_factory
        self.cache = cache
        self.http_client = http_client
        self.token_service = token_service
        self.recommendation_service = recommendation_service

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
        cache: Optional[RedisCache] = None,
        video_search: Optional[VideoSearchService] = None,
    ) -> "ServiceContainer":
        engine = create_db_engine(settings.DATABASE_URL)
        cache = cache or RedisCache(settings.REDIS_URL)
        http_client = http_client or httpx.AsyncClient(follow_redirects=True)

        token_service = TokenService(
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expires_delta=timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS),
        )
        llm_client = MistralClient(
            http_client,
            settings.MISTRAL_API_KEY,
            api_url=settings.MISTRAL_API_URL,
            model=settings.MISTRAL_MODEL,
            temperature=settings.MISTRAL_TEMPERATURE,
            timeout=settings.LLM_TIMEOUT_SECONDS,
        )
        video_search = video_search or VideoSearchService.from_api_key(
            settings.YOUTUBE_API_KEY,
            cache=cache,
            cache_ttl=settings.CACHE_EXPIRE_SECONDS,
        )
        artwork = ArtworkService(
            LastFMClient(
                http_client,
                settings.LASTFM_API_KEY,
                api_url=settings.LASTFM_API_URL,
                timeout=settings.LOOKUP_TIMEOUT_SECONDS,
            ),
            placeholder_url=settings.DEFAULT_ARTWORK_URL,
            cache=cache,
            cache_ttl=settings.CACHE_EXPIRE_SECONDS,
        )
        recommendation_service = RecommendationService(
            llm_client,
            video_search,
            artwork,
            count=settings.RECOMMENDATION_COUNT,
        )
        return cls(
            settings=settings,
            engine=engine,
            session_factory=create_session_factory(engine),
            cache=cache,
            http_client=http_client,
            token_service=token_service,
            recommendation_service=recommendation_service,
        )

    def startup(self) -> None:
        """Verify the database and create tables; failure here is fatal"""
        # Register models on the metadata
        import moodmusic.db.models  # noqa: F401

        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.critical(f"Database connection failed: {e}")
            raise
        logger.info("Database connection established")

    async def shutdown(self) -> None:
        await self.http_client.aclose()
        self.cache.close()
        self.engine.dispose()
