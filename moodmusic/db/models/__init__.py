from moodmusic.db.models.user import User
from moodmusic.db.models.history import History

__all__ = ["User", "History"]
