from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from bookcircle.schemas.base import CamelModel

SortOrder = Literal["asc", "desc"]


def _not_blank(value: str | None, message: str) -> str | None:
    if value is not None and not value.strip():
        raise ValueError(message)
    return value


class ReviewCreate(CamelModel):
    book_id: str = Field(min_length=1, max_length=64)
    text: str = Field(min_length=5)
    rating: int = Field(ge=1, le=5)

    @field_validator("book_id")
    @classmethod
    def book_id_not_blank(cls, v: str) -> str:
        return _not_blank(v, "bookId is required")

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _not_blank(v, "Review text must not be blank")


class ReviewUpdate(CamelModel):
    text: str | None = Field(None, min_length=5)
    rating: int | None = Field(None, ge=1, le=5)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str | None) -> str | None:
        return _not_blank(v, "Review text must not be blank")


class ReviewResponse(CamelModel):
    id: int
    book_id: str
    author_id: int
    text: str
    rating: int
    created_at: datetime
    updated_at: datetime


class ReviewView(ReviewResponse):
    likes_count: int = 0
    is_liked_by_user: bool = False


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class ReviewPage(CamelModel):
    reviews: list[ReviewView]
    pagination: Pagination


class RatingSummary(CamelModel):
    book_id: str
    total: int
    average: float
    distribution: dict[int, int]
