# ============================================================================
# FILE: moodmusic/api/endpoints/recommendations.py
# ============================================================================
from fastapi import APIRouter, Depends
from moodmusic.api.dependencies import get_recommendation_service
from moodmusic.schemas.recommendation import RecommendationRequest, RecommendationResponse
from moodmusic.services.recommendation_service import RecommendationService

router = APIRouter()

@router.post("", response_model=RecommendationResponse)
async def get_recommendations(
    request: RecommendationRequest,
    recommendation_service: RecommendationService = Depends(get_recommendation_service)
):
    """
    Suggest songs for a mood, language and genre
    Available to all users; results are not saved (clients save accepted songs to history)
    """
    recommendations = await recommendation_service.recommend(
        request.mood, request.language, request.genre
    )
    return RecommendationResponse(recommendations=recommendations)
