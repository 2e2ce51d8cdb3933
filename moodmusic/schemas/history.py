# ============================================================================
# FILE: moodmusic/schemas/history.py
# ============================================================================
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional

class Feedback(str, Enum):
    """Closed set of feedback values accepted on every write path"""
    LIKED = "liked"
    DISLIKED = "disliked"

class HistoryCreate(BaseModel):
    """Schema for saving an accepted recommendation"""
    song_title: str = Field(..., min_length=1)
    artist: str
    youtube_link: str = Field(..., min_length=1)
    mood: str
    language: str
    genre: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class FeedbackUpdate(BaseModel):
    """Schema for setting (or clearing, with null) feedback"""
    feedback: Optional[Feedback] = None

class HistoryEntry(BaseModel):
    """Schema for a history entry in responses"""
    id: int
    user_id: int
    song_title: str
    artist: str
    youtube_link: str
    mood: str
    language: str
    genre: str
    timestamp: datetime
    feedback: Optional[Feedback] = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True

class HistoryResponse(BaseModel):
    success: bool = True
    history: HistoryEntry

class HistoryListResponse(BaseModel):
    success: bool = True
    history: List[HistoryEntry]

class FeedbackResponse(BaseModel):
    success: bool = True
    updated: HistoryEntry

class CommunityResponse(BaseModel):
    success: bool = True
    songs: List[HistoryEntry]

class MessageResponse(BaseModel):
    success: bool = True
    message: str
