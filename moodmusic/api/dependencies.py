# ============================================================================
# FILE: moodmusic/api/dependencies.py
# ============================================================================
from fastapi import Depends, Request
from moodmusic.core.container import ServiceContainer
from moodmusic.core.errors import Unauthenticated
from moodmusic.core.security import TokenClaims, TokenService
from moodmusic.services.recommendation_service import RecommendationService
from typing import Optional

def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container

def get_token_service(container: ServiceContainer = Depends(get_container)) -> TokenService:
    return container.token_service

def get_recommendation_service(container: ServiceContainer = Depends(get_container)) -> RecommendationService:
    return container.recommendation_service

def get_current_user(request: Request) -> Optional[TokenClaims]:
    """
    Principal attached by the authentication gate
    Returns None for anonymous requests
    """
    return getattr(request.state, "user", None)

def require_current_user(
    current_user: Optional[TokenClaims] = Depends(get_current_user)
) -> TokenClaims:
    """
    Require authenticated user (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    if current_user is None:
        raise Unauthenticated()
    return current_user
