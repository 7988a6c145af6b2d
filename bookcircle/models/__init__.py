from bookcircle.models.reading_status import ReadingStatus
from bookcircle.models.review import Review, ReviewLike
from bookcircle.models.user import User

__all__ = ["ReadingStatus", "Review", "ReviewLike", "User"]
