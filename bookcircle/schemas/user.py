from bookcircle.schemas.base import CamelModel


class UserStats(CamelModel):
    total_reviews: int
    avg_rating: float
    total_likes: int
