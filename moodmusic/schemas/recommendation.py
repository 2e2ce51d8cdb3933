# ============================================================================
# FILE: moodmusic/schemas/recommendation.py
# ============================================================================
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import List

class RecommendationRequest(BaseModel):
    """Mood / language / genre are free text, forwarded verbatim to the model"""
    mood: str
    language: str
    genre: str

class Recommendation(BaseModel):
    """An enriched song suggestion"""
    title: str          # raw "Song Title - Artist Name" line
    song_title: str
    artist: str
    link: str
    image: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class RecommendationResponse(BaseModel):
    success: bool = True
    recommendations: List[Recommendation]
