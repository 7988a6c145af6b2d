from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bookcircle.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from bookcircle.database import get_session
from bookcircle.schemas.base import MessageResponse
from bookcircle.schemas.review import (
    RatingSummary,
    ReviewCreate,
    ReviewPage,
    ReviewResponse,
    ReviewUpdate,
    SortOrder,
)
from bookcircle.security import Principal, optional_principal, require_principal
from bookcircle.services import review_service

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("/{book_id}", response_model=ReviewPage)
async def list_reviews(
    book_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    sort: SortOrder = Query("desc", description="Order by creation time"),
    principal: Principal | None = Depends(optional_principal),
    session: AsyncSession = Depends(get_session),
):
    requester_id = principal.user_id if principal else None
    return await review_service.list_reviews(session, book_id, requester_id, page, limit, sort)


@router.get("/{book_id}/summary", response_model=RatingSummary)
async def get_rating_summary(book_id: str, session: AsyncSession = Depends(get_session)):
    return await review_service.rating_summary(session, book_id)


@router.post("", response_model=ReviewResponse, status_code=201)
async def create_review(
    data: ReviewCreate,
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_session),
):
    return await review_service.create_review(
        session, principal.user_id, data.book_id, data.text, data.rating
    )


@router.put("/{review_id}", response_model=ReviewResponse)
async def update_review(
    review_id: int,
    data: ReviewUpdate,
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_session),
):
    return await review_service.update_review(
        session, review_id, principal.user_id, text=data.text, rating=data.rating
    )


@router.delete("/{review_id}", response_model=MessageResponse)
async def delete_review(
    review_id: int,
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_session),
):
    await review_service.delete_review(session, review_id, principal.user_id)
    return MessageResponse(message="Review deleted")


@router.post("/{review_id}/like", response_model=MessageResponse)
async def like_review(
    review_id: int,
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_session),
):
    await review_service.like_review(session, review_id, principal.user_id)
    return MessageResponse(message="Review liked")


@router.delete("/{review_id}/like", response_model=MessageResponse)
async def unlike_review(
    review_id: int,
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_session),
):
    await review_service.unlike_review(session, review_id, principal.user_id)
    return MessageResponse(message="Like removed")
