# ============================================================================
# FILE: moodmusic/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field, model_validator
from typing import Optional

class UserCreate(BaseModel):
    """Schema for user registration"""
    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)

class UserLogin(BaseModel):
    """Schema for user login (by email or username)"""
    email: Optional[EmailStr] = None
    username: Optional[str] = None
    password: str

    @model_validator(mode="after")
    def check_identifier(self):
        if not self.email and not self.username:
            raise ValueError("email or username is required")
        return self

class UserResponse(BaseModel):
    """Public user fields"""
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True

class AuthResponse(BaseModel):
    """Schema for register / login responses"""
    success: bool = True
    token: str
    user: UserResponse

class CurrentUserResponse(BaseModel):
    success: bool
    isAuthenticated: bool
    user: Optional[UserResponse] = None
