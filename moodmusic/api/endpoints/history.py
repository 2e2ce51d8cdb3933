# ============================================================================
# FILE: moodmusic/api/endpoints/history.py
# ============================================================================
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from moodmusic.db.session import get_db
from moodmusic.api.dependencies import get_container, get_current_user, require_current_user
from moodmusic.core.container import ServiceContainer
from moodmusic.core.security import TokenClaims
from moodmusic.schemas.history import (
    FeedbackResponse,
    FeedbackUpdate,
    HistoryCreate,
    HistoryEntry,
    HistoryListResponse,
    HistoryResponse,
    MessageResponse,
)
from moodmusic.services.history_service import history_service
from typing import Optional

router = APIRouter()
legacy_router = APIRouter()

@router.post("", response_model=HistoryResponse)
async def save_to_history(
    entry: HistoryCreate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_current_user)
):
    """
    Save an accepted recommendation to the current user's history
    Requires authentication
    """
    history = history_service.append(db, entry, current_user.id)
    return HistoryResponse(history=HistoryEntry.model_validate(history))

@router.get("", response_model=HistoryListResponse)
async def get_history(
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
    current_user: TokenClaims = Depends(require_current_user)
):
    """
    Get the current user's history, newest first
    Requires authentication
    """
    history = history_service.list(db, current_user.id, container.settings.HISTORY_LIMIT)
    return HistoryListResponse(history=[HistoryEntry.model_validate(h) for h in history])

@router.put("/{entry_id}/feedback", response_model=FeedbackResponse)
async def update_feedback(
    entry_id: int,
    update: FeedbackUpdate,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_current_user)
):
    """
    Set or clear feedback on a history entry
    Requires authentication and ownership
    """
    updated = history_service.set_feedback(db, entry_id, update.feedback, current_user.id)
    return FeedbackResponse(updated=HistoryEntry.model_validate(updated))

@router.delete("/{entry_id}", response_model=MessageResponse)
async def delete_from_history(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: TokenClaims = Depends(require_current_user)
):
    """
    Delete a history entry
    Requires authentication and ownership
    """
    history_service.remove(db, entry_id, current_user.id)
    return MessageResponse(message="Song deleted successfully")

@legacy_router.get("", response_model=HistoryListResponse, deprecated=True)
async def get_history_legacy(
    db: Session = Depends(get_db),
    container: ServiceContainer = Depends(get_container),
    current_user: Optional[TokenClaims] = Depends(get_current_user)
):
    """
    Older unprotected history route
    Returns the caller's history when authenticated, an empty list for guests
    """
    if current_user is None:
        return HistoryListResponse(history=[])
    history = history_service.list(db, current_user.id, container.settings.HISTORY_LIMIT)
    return HistoryListResponse(history=[HistoryEntry.model_validate(h) for h in history])
