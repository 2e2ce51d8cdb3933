# ============================================================================
# FILE: moodmusic/api/router.py
# ============================================================================
from fastapi import APIRouter
from moodmusic.api.endpoints import auth, community, history, recommendations

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(recommendations.router, prefix="/recommendations", tags=["recommendations"])
api_router.include_router(history.router, prefix="/protected/history", tags=["history"])
api_router.include_router(history.legacy_router, prefix="/history", tags=["history"])
api_router.include_router(community.router, prefix="/community", tags=["community"])
