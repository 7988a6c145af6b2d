"""Review aggregation, mutation and like toggling."""

import logging
import math

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookcircle.errors import Conflict, Forbidden, NotFound, Unauthorized, ValidationError
from bookcircle.models import Review, ReviewLike, User
from bookcircle.schemas.review import Pagination, RatingSummary, ReviewPage, ReviewView

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 5
MIN_RATING = 1
MAX_RATING = 5


def total_pages(total: int, limit: int) -> int:
    """Never less than one, so an empty book still renders as "page 1 of 1"."""
    return max(1, math.ceil(total / limit))


def _text_error(text) -> dict | None:
    if not isinstance(text, str) or len(text) < MIN_TEXT_LENGTH or not text.strip():
        return {"field": "text", "message": f"Review text must be at least {MIN_TEXT_LENGTH} characters"}
    return None


def _rating_error(rating) -> dict | None:
    valid = isinstance(rating, int) and not isinstance(rating, bool) and MIN_RATING <= rating <= MAX_RATING
    if not valid:
        return {"field": "rating", "message": f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}"}
    return None


def validate_new_review(book_id, text, rating) -> None:
    errors = []
    if not isinstance(book_id, str) or not book_id.strip():
        errors.append({"field": "bookId", "message": "bookId is required"})
    for error in (_text_error(text), _rating_error(rating)):
        if error is not None:
            errors.append(error)
    if errors:
        raise ValidationError(errors)


async def _get_review_or_404(session: AsyncSession, review_id: int) -> Review:
    review = (await session.execute(select(Review).where(Review.id == review_id))).scalar_one_or_none()
    if review is None:
        raise NotFound("Review not found")
    return review


async def list_reviews(
    session: AsyncSession,
    book_id: str,
    requester_id: int | None = None,
    page: int = 1,
    limit: int = 5,
    sort: str = "desc",
) -> ReviewPage:
    """Return one page of a book's reviews with derived like state.

    ``likes_count`` is always counted from ``review_likes``; there is no stored
    counter. ``is_liked_by_user`` is false for anonymous requests.
    """
    if page < 1 or limit < 1:
        raise ValidationError(
            [{"field": name, "message": "Must be at least 1"} for name, value in (("page", page), ("limit", limit)) if value < 1]
        )

    total = (
        await session.execute(select(func.count()).select_from(Review).where(Review.book_id == book_id))
    ).scalar_one()

    likes_count = (
        select(func.count())
        .select_from(ReviewLike)
        .where(ReviewLike.review_id == Review.id)
        .correlate(Review)
        .scalar_subquery()
    )
    if sort == "asc":
        order = (Review.created_at.asc(), Review.id.asc())
    else:
        order = (Review.created_at.desc(), Review.id.desc())

    stmt = (
        select(Review, likes_count.label("likes_count"))
        .where(Review.book_id == book_id)
        .order_by(*order)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    rows = (await session.execute(stmt)).all()

    liked_ids: set[int] = set()
    if requester_id is not None and rows:
        result = await session.execute(
            select(ReviewLike.review_id).where(
                ReviewLike.user_id == requester_id,
                ReviewLike.review_id.in_([review.id for review, _ in rows]),
            )
        )
        liked_ids = set(result.scalars().all())

    reviews = [
        ReviewView(
            id=review.id,
            book_id=review.book_id,
            author_id=review.author_id,
            text=review.text,
            rating=review.rating,
            created_at=review.created_at,
            updated_at=review.updated_at,
            likes_count=count,
            is_liked_by_user=review.id in liked_ids,
        )
        for review, count in rows
    ]
    return ReviewPage(
        reviews=reviews,
        pagination=Pagination(total=total, page=page, limit=limit, total_pages=total_pages(total, limit)),
    )


async def rating_summary(session: AsyncSession, book_id: str) -> RatingSummary:
    result = await session.execute(
        select(Review.rating, func.count()).where(Review.book_id == book_id).group_by(Review.rating)
    )
    distribution = {value: 0 for value in range(MAX_RATING, MIN_RATING - 1, -1)}
    for rating, count in result.all():
        distribution[rating] = count

    total = sum(distribution.values())
    average = 0.0
    if total:
        average = round(sum(rating * count for rating, count in distribution.items()) / total, 1)
    return RatingSummary(book_id=book_id, total=total, average=average, distribution=distribution)


async def create_review(session: AsyncSession, user_id: int, book_id: str, text: str, rating: int) -> Review:
    validate_new_review(book_id, text, rating)
    review = Review(book_id=book_id, author_id=user_id, text=text, rating=rating)
    session.add(review)
    await session.commit()
    await session.refresh(review)
    logger.info("Review %s created on book %s by user %s", review.id, book_id, user_id)
    return review


async def update_review(
    session: AsyncSession,
    review_id: int,
    user_id: int,
    text: str | None = None,
    rating: int | None = None,
) -> Review:
    review = await _get_review_or_404(session, review_id)
    if review.author_id != user_id:
        raise Forbidden("You can only edit your own reviews")

    errors = []
    if text is not None and (error := _text_error(text)):
        errors.append(error)
    if rating is not None and (error := _rating_error(rating)):
        errors.append(error)
    if errors:
        raise ValidationError(errors)

    if text is not None:
        review.text = text
    if rating is not None:
        review.rating = rating
    await session.commit()
    await session.refresh(review)
    logger.info("Review %s updated by user %s", review_id, user_id)
    return review


async def delete_review(session: AsyncSession, review_id: int, user_id: int) -> None:
    """Delete a review and its likes as one unit of work."""
    review = await _get_review_or_404(session, review_id)
    if review.author_id != user_id:
        raise Forbidden("You can only delete your own reviews")

    await session.execute(delete(ReviewLike).where(ReviewLike.review_id == review_id))
    await session.delete(review)
    await session.commit()
    logger.info("Review %s deleted by user %s", review_id, user_id)


async def _like_exists(session: AsyncSession, review_id: int, user_id: int) -> bool:
    like = (
        await session.execute(
            select(ReviewLike).where(ReviewLike.review_id == review_id, ReviewLike.user_id == user_id)
        )
    ).scalar_one_or_none()
    return like is not None


async def like_review(session: AsyncSession, review_id: int, user_id: int) -> None:
    await _get_review_or_404(session, review_id)
    if await session.get(User, user_id) is None:
        # A token can outlive its account.
        raise Unauthorized("Unknown user")

    if await _like_exists(session, review_id, user_id):
        logger.warning("User %s already likes review %s", user_id, review_id)
        raise Conflict("Review already liked")

    session.add(ReviewLike(review_id=review_id, user_id=user_id))
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        if await _like_exists(session, review_id, user_id):
            raise Conflict("Review already liked") from e
        raise


async def unlike_review(session: AsyncSession, review_id: int, user_id: int) -> None:
    """Remove a like. Unliking a review that was never liked is a no-op."""
    await _get_review_or_404(session, review_id)
    await session.execute(
        delete(ReviewLike).where(ReviewLike.review_id == review_id, ReviewLike.user_id == user_id)
    )
    await session.commit()
