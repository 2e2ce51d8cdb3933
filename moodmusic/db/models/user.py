# ============================================================================
# FILE: moodmusic/db/models/user.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from moodmusic.db.base import Base

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class User(Base):
    """User model for authentication and history ownership"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    history = relationship("History", back_populates="user")
