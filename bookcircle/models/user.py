from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookcircle.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))

    reviews: Mapped[list["Review"]] = relationship(back_populates="author", cascade="all, delete-orphan")
    reading_statuses: Mapped[list["ReadingStatus"]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
