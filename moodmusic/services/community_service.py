# ============================================================================
# FILE: moodmusic/services/community_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy.orm import Session
from moodmusic.db.models.history import History

DEFAULT_LIMIT = 100

class CommunityService:
    """Read-only feed over every user's history"""

    def list(
        self,
        db: Session,
        mood: Optional[str] = None,
        language: Optional[str] = None,
        genre: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> List[History]:
        """Newest entries matching every supplied filter exactly (empty filters are ignored)"""
        query = db.query(History)
        if mood:
            query = query.filter(History.mood == mood)
        if language:
            query = query.filter(History.language == language)
        if genre:
            query = query.filter(History.genre == genre)
        return query.order_by(History.timestamp.desc(), History.id.desc()).limit(limit).all()

# Create singleton instance
community_service = CommunityService()
