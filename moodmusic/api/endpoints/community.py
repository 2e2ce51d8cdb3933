# ============================================================================
# FILE: moodmusic/api/endpoints/community.py
# ============================================================================
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from moodmusic.db.session import get_db
from moodmusic.api.dependencies import get_container
from moodmusic.core.container import ServiceContainer
from moodmusic.schemas.history import CommunityResponse, HistoryEntry
from moodmusic.services.community_service import community_service
from typing import Optional

router = APIRouter()

@router.get("", response_model=CommunityResponse)
async def get_community_songs(
    mood: Optional[str] = Query(None, description="Exact mood to match"),
    language: Optional[str] = Query(None, description="Exact language to match"),
    genre: Optional[str] = Query(None, description="Exact genre to match"),
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container)
):
    """
    Songs saved by all users, newest first
    Available to all users (authenticated and anonymous)
    """
    songs = community_service.list(
        db, mood=mood, language=language, genre=genre, limit=container.settings.COMMUNITY_LIMIT
    )
    return CommunityResponse(songs=[HistoryEntry.model_validate(s) for s in songs])
