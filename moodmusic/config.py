# ============================================================================
# FILE: moodmusic/config.py
# ============================================================================
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "MoodMusic"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./moodmusic.db"  # Change to PostgreSQL in production

    # Redis cache (empty URL disables caching)
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_EXPIRE_SECONDS: int = 86400

    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    PROTECTED_PREFIX: str = "/api/protected"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Mistral chat completions
    MISTRAL_API_KEY: str = ""
    MISTRAL_API_URL: str = "https://api.mistral.ai/v1/chat/completions"
    MISTRAL_MODEL: str = "mistral-large-2411"
    MISTRAL_TEMPERATURE: float = 0.7
    LLM_TIMEOUT_SECONDS: float = 30.0

    # Last.fm artwork lookup
    LASTFM_API_KEY: str = ""
    LASTFM_API_URL: str = "https://ws.audioscrobbler.com/2.0/"
    DEFAULT_ARTWORK_URL: str = "https://wikisound.org/mastering/Audio-waveform-player/data/default_artwork/music_ph.png"
    LOOKUP_TIMEOUT_SECONDS: float = 10.0

    # YouTube Data API (optional, ytmusicapi is used when no key is set)
    YOUTUBE_API_KEY: str = ""
    YOUTUBE_API_SERVICE_NAME: str = "youtube"
    YOUTUBE_API_VERSION: str = "v3"

    # Recommendations / feeds
    RECOMMENDATION_COUNT: int = 5
    HISTORY_LIMIT: int = 100
    COMMUNITY_LIMIT: int = 100

    class Config:
        env_file = ".env"
        case_sensitive = True

@lru_cache
def get_settings() -> Settings:
    return Settings()
