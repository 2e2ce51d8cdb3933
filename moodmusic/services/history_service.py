# ============================================================================
# FILE: moodmusic/services/history_service.py
# Per-user history ledger with ownership checks
# ============================================================================
from typing import List, Optional, Union
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from moodmusic.core.errors import BadRequest, Forbidden, NotFound
from moodmusic.db.models.history import History
from moodmusic.schemas.history import Feedback, HistoryCreate
import logging

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100

class HistoryService:
    """Service layer for song history operations"""

    def append(self, db: Session, entry: HistoryCreate, owner_id: int) -> History:
        """Save an accepted recommendation for its owner (no dedup)"""
        try:
            history = History(
                user_id=owner_id,
                song_title=entry.song_title,
                artist=entry.artist,
                youtube_link=entry.youtube_link,
                mood=entry.mood,
                language=entry.language,
                genre=entry.genre,
            )
            db.add(history)
            db.commit()
            db.refresh(history)
            logger.info(f"History entry {history.id} saved for user {owner_id}")
            return history
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error saving to history: {e}")
            raise

    def list(self, db: Session, owner_id: int, limit: int = DEFAULT_LIMIT) -> List[History]:
        """Owner's entries, newest first"""
        return db.query(History).filter(
            History.user_id == owner_id
        ).order_by(History.timestamp.desc(), History.id.desc()).limit(limit).all()

    def get_owned(self, db: Session, entry_id: int, acting_user_id: int) -> History:
        """Load an entry and verify the acting user owns it"""
        entry = db.get(History, entry_id)
        if entry is None:
            raise NotFound("Song not found")
        if entry.user_id != acting_user_id:
            logger.warning(f"User {acting_user_id} denied access to history entry {entry_id}")
            raise Forbidden()
        return entry

    def set_feedback(
        self,
        db: Session,
        entry_id: int,
        feedback: Optional[Union[Feedback, str]],
        acting_user_id: int,
    ) -> History:
        """Overwrite the feedback of an owned entry (None clears it)"""
        if feedback is not None:
            try:
                feedback = Feedback(feedback)
            except ValueError:
                raise BadRequest(f"Invalid feedback: {feedback}")

        entry = self.get_owned(db, entry_id, acting_user_id)
        try:
            entry.feedback = feedback.value if feedback is not None else None
            db.commit()
            db.refresh(entry)
            logger.info(f"Feedback on history entry {entry_id} set to {entry.feedback}")
            return entry
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error updating feedback: {e}")
            raise

    def remove(self, db: Session, entry_id: int, acting_user_id: int) -> None:
        """Delete an owned entry"""
        entry = self.get_owned(db, entry_id, acting_user_id)
        try:
            db.delete(entry)
            db.commit()
            logger.info(f"History entry {entry_id} deleted")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error deleting history entry: {e}")
            raise

# Create singleton instance
history_service = HistoryService()
