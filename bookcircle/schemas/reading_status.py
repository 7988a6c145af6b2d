from datetime import datetime
from typing import Literal

from pydantic import Field

from bookcircle.schemas.base import CamelModel

ReadingState = Literal["want_to_read", "reading", "finished"]


class ReadingStatusUpsert(CamelModel):
    book_id: str = Field(min_length=1, max_length=64)
    status: ReadingState
    format: str | None = Field(None, max_length=50)
    pages_read: int = Field(0, ge=0)


class ReadingStatusResponse(CamelModel):
    id: int
    book_id: str
    user_id: int
    status: ReadingState
    format: str | None
    pages_read: int
    created_at: datetime
    updated_at: datetime
