# ============================================================================
# FILE: moodmusic/db/models/history.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship, validates
from moodmusic.db.base import Base
from moodmusic.db.models.user import utcnow

FEEDBACK_VALUES = ("liked", "disliked")

class History(Base):
    """Accepted recommendation saved to a user's history"""
    __tablename__ = "song_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    song_title = Column(String, nullable=False)
    artist = Column(String, nullable=False)
    youtube_link = Column(String, nullable=False)
    mood = Column(String, nullable=False, index=True)
    language = Column(String, nullable=False, index=True)
    genre = Column(String, nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), default=utcnow, index=True)
    feedback = Column(String(16), nullable=True)

    # Relationships
    user = relationship("User", back_populates="history")

    @validates("user_id")
    def validate_user_id(self, key, value):
        # Ownership is fixed once set
        if self.user_id is not None and value != self.user_id:
            raise ValueError("History owner cannot be changed")
        return value

    @validates("feedback")
    def validate_feedback(self, key, value):
        if value is not None and value not in FEEDBACK_VALUES:
            raise ValueError(f"Invalid feedback: {value}")
        return value
