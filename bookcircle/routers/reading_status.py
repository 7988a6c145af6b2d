from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookcircle.database import get_session
from bookcircle.schemas.reading_status import ReadingStatusResponse, ReadingStatusUpsert
from bookcircle.security import Principal, require_principal
from bookcircle.services import reading_status_service

router = APIRouter(prefix="/reading-status", tags=["reading-status"])


@router.get("", response_model=list[ReadingStatusResponse])
async def list_statuses(
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_session),
):
    return await reading_status_service.list_statuses(session, principal.user_id)


@router.get("/{book_id}", response_model=ReadingStatusResponse | None)
async def get_status(
    book_id: str,
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_session),
):
    """The caller's status for one book, or ``null`` when none is set."""
    return await reading_status_service.get_status(session, principal.user_id, book_id)


@router.post("", response_model=ReadingStatusResponse)
async def upsert_status(
    data: ReadingStatusUpsert,
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_session),
):
    return await reading_status_service.upsert_status(session, principal.user_id, data)
