"""Registration, login and per-user review statistics."""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookcircle.errors import NotFound, Unauthorized, ValidationError
from bookcircle.models import Review, ReviewLike, User
from bookcircle.schemas.user import UserStats
from bookcircle.security import hash_password, issue_token, verify_password

logger = logging.getLogger(__name__)


async def register_user(session: AsyncSession, email: str, password: str) -> User:
    email = email.strip().lower()
    existing = (await session.execute(select(User).where(User.email == email))).scalar_one_or_none()
    if existing is not None:
        raise ValidationError.single("email", "A user with this email already exists")

    user = User(email=email, password_hash=hash_password(password))
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        raise ValidationError.single("email", "A user with this email already exists") from e
    await session.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


async def authenticate(session: AsyncSession, email: str, password: str) -> tuple[User, str]:
    """Check credentials and issue a bearer token for the user."""
    email = email.strip().lower()
    user = (await session.execute(select(User).where(User.email == email))).scalar_one_or_none()
    if user is None or not verify_password(user.password_hash, password):
        logger.warning("Failed login for %s", email)
        raise Unauthorized("Invalid email or password")
    return user, issue_token(user.id)


async def user_stats(session: AsyncSession, user_id: int) -> UserStats:
    user = (await session.execute(select(User).where(User.id == user_id))).scalar_one_or_none()
    if user is None:
        raise NotFound("User not found")

    total_reviews, avg_rating = (
        await session.execute(
            select(func.count(Review.id), func.avg(Review.rating)).where(Review.author_id == user_id)
        )
    ).one()
    total_likes = (
        await session.execute(
            select(func.count())
            .select_from(ReviewLike)
            .join(Review, Review.id == ReviewLike.review_id)
            .where(Review.author_id == user_id)
        )
    ).scalar_one()

    return UserStats(
        total_reviews=total_reviews,
        avg_rating=float(avg_rating) if avg_rating is not None else 0.0,
        total_likes=total_likes,
    )
