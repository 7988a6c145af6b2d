from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookcircle.database import get_session
from bookcircle.schemas.user import UserStats
from bookcircle.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}/stats", response_model=UserStats)
async def get_user_stats(user_id: int, session: AsyncSession = Depends(get_session)):
    return await user_service.user_stats(session, user_id)
