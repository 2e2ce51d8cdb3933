# ============================================================================
# FILE: moodmusic/api/endpoints/auth.py
# ============================================================================
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from moodmusic.db.session import get_db
from moodmusic.api.dependencies import get_current_user, get_token_service
from moodmusic.core.errors import AppError, BadRequest, NotFound
from moodmusic.core.security import TokenClaims, TokenService
from moodmusic.schemas.user import AuthResponse, CurrentUserResponse, UserCreate, UserLogin, UserResponse
from moodmusic.services.user_service import user_service
from typing import Optional
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service)
):
    """
    Register a new user account
    Returns a bearer token valid for 7 days
    """
    # Check if email already exists
    if user_service.get_user_by_email(db, user_data.email):
        raise BadRequest("Email already exists")

    # Check if username already exists
    if user_service.get_user_by_username(db, user_data.username):
        raise BadRequest("Username already exists")

    try:
        user = user_service.create_user(db, user_data)
    except SQLAlchemyError as e:
        logger.error(f"Registration error: {e}")
        raise AppError("Registration failed. Please try again.")

    token = token_service.issue(user.id, user.username)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))

@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service)
):
    """
    Login with email (or username) and password
    """
    user = user_service.authenticate_user(
        db, credentials.password, email=credentials.email, username=credentials.username
    )
    if not user:
        raise BadRequest("Invalid email or password")

    token = token_service.issue(user.id, user.username)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))

@router.get("/user", response_model=CurrentUserResponse, response_model_exclude_none=True)
async def get_current_user_info(
    db: Session = Depends(get_db),
    current_user: Optional[TokenClaims] = Depends(get_current_user)
):
    """
    Current user information
    Anonymous callers get isAuthenticated=false instead of an error
    """
    if current_user is None:
        return CurrentUserResponse(success=False, isAuthenticated=False)

    user = user_service.get_user_by_id(db, current_user.id)
    if not user:
        raise NotFound("Profile not found")

    return CurrentUserResponse(
        success=True,
        isAuthenticated=True,
        user=UserResponse.model_validate(user)
    )
