"""Per-user reading status, one row per (user, book)."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bookcircle.models import ReadingStatus
from bookcircle.schemas.reading_status import ReadingStatusUpsert

logger = logging.getLogger(__name__)


async def list_statuses(session: AsyncSession, user_id: int) -> list[ReadingStatus]:
    result = await session.execute(
        select(ReadingStatus)
        .where(ReadingStatus.user_id == user_id)
        .order_by(ReadingStatus.updated_at.desc(), ReadingStatus.id.desc())
    )
    return list(result.scalars().all())


async def get_status(session: AsyncSession, user_id: int, book_id: str) -> ReadingStatus | None:
    result = await session.execute(
        select(ReadingStatus).where(ReadingStatus.user_id == user_id, ReadingStatus.book_id == book_id)
    )
    return result.scalar_one_or_none()


async def upsert_status(session: AsyncSession, user_id: int, data: ReadingStatusUpsert) -> ReadingStatus:
    """Create the row on first use, update it afterwards."""
    record = await get_status(session, user_id, data.book_id)
    if record is None:
        record = ReadingStatus(
            book_id=data.book_id,
            user_id=user_id,
            status=data.status,
            format=data.format,
            pages_read=data.pages_read,
        )
        session.add(record)
    else:
        for key, value in data.model_dump(exclude={"book_id"}, exclude_unset=True).items():
            setattr(record, key, value)
    await session.commit()
    await session.refresh(record)
    logger.info("Reading status for book %s by user %s set to %s", data.book_id, user_id, record.status)
    return record
