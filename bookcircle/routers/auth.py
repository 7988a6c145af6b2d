from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookcircle.database import get_session
from bookcircle.schemas.auth import LoginRequest, RegisterResponse, TokenResponse
from bookcircle.services import user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(data: LoginRequest, session: AsyncSession = Depends(get_session)):
    user = await user_service.register_user(session, data.email, data.password)
    return RegisterResponse(message="User created", user_id=user.id)


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, session: AsyncSession = Depends(get_session)):
    user, token = await user_service.authenticate(session, data.email, data.password)
    return TokenResponse(token=token, user_id=user.id)
