from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.auth import RequestContext, get_request_context
from blog_api.core.db import get_db
from blog_api.core.schemas import Envelope
from blog_api.domains.identity.entities import User
from blog_api.domains.identity.schemas import (
    AuthPayload, UserCreate, UserLogin, UserResponse, UserUpdate
)
from blog_api.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


def user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        avatar=user.avatar,
        created_at=user.created_at
    )


@router.post("/register", response_model=Envelope[AuthPayload], status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Регистрация нового пользователя"""
    identity_service = IdentityService(db)

    user = await identity_service.register_user(user_data)
    token = identity_service.issue_token(user)

    return Envelope[AuthPayload](data=AuthPayload(token=token, user=user_response(user)))


@router.post("/login", response_model=Envelope[AuthPayload])
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Вход пользователя"""
    identity_service = IdentityService(db)

    user = await identity_service.authenticate_user(login_data)
    token = identity_service.issue_token(user)

    return Envelope[AuthPayload](data=AuthPayload(token=token, user=user_response(user)))


@router.get("/me", response_model=Envelope[UserResponse])
async def get_current_user_info(context: RequestContext = Depends(get_request_context)):
    """Получение информации о текущем пользователе"""
    return Envelope[UserResponse](data=user_response(context.user))


@router.put("/profile", response_model=Envelope[UserResponse])
async def update_profile(
    update_data: UserUpdate,
    context: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Обновление профиля текущего пользователя"""
    identity_service = IdentityService(db)

    user = await identity_service.update_user_profile(context.user_id, update_data)

    return Envelope[UserResponse](data=user_response(user))
