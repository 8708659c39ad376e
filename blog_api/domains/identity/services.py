import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from blog_api.core.errors import ConflictError, NotFoundError, UnauthorizedError
from blog_api.core.security import create_access_token, verify_token
from blog_api.db.repositories.user_repository import UserRepository
from blog_api.domains.identity.entities import User, ROLE_USER
from blog_api.domains.identity.schemas import UserCreate, UserLogin, UserUpdate

logger = logging.getLogger(__name__)


class IdentityService:
    """Сервис для работы с идентификацией и аутентификацией пользователей"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def register_user(self, user_data: UserCreate, role: str = ROLE_USER) -> User:
        """Регистрация нового пользователя"""
        if await self.user_repository.email_exists(user_data.email):
            raise ConflictError("User already exists")

        user = User.create_user(
            name=user_data.name,
            email=user_data.email,
            password=user_data.password,
            role=role
        )

        created = await self.user_repository.create(user)
        logger.info("Registered user %s (%s)", created.id, created.role)
        return created

    async def authenticate_user(self, login_data: UserLogin) -> User:
        """Аутентификация пользователя по email и паролю"""
        user = await self.user_repository.get_by_email(login_data.email)

        if not user or not user.authenticate(login_data.password):
            logger.warning("Failed login attempt for %s", login_data.email)
            raise UnauthorizedError("Invalid credentials")

        return user

    def issue_token(self, user: User) -> str:
        """Создание JWT токена для пользователя"""
        return create_access_token(data={"sub": str(user.id), "role": user.role})

    async def update_user_profile(self, user_id: uuid.UUID, update_data: UserUpdate) -> User:
        """Обновление профиля пользователя"""
        user = await self.user_repository.get_by_id(user_id)

        if not user:
            raise NotFoundError("User not found")

        # Проверка уникальности email при изменении
        if update_data.email and update_data.email.lower() != user.email:
            if await self.user_repository.email_exists(update_data.email):
                raise ConflictError("Email already registered")

        user.update_profile(
            name=update_data.name,
            email=update_data.email.lower() if update_data.email else None,
            avatar=update_data.avatar
        )

        updated = await self.user_repository.update(user)
        logger.info("Updated profile of user %s", user_id)
        return updated

    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        """Получение текущего пользователя из JWT токена"""
        payload = verify_token(token)
        if not payload:
            return None

        try:
            user_id = uuid.UUID(str(payload.get("sub")))
        except ValueError:
            return None

        return await self.user_repository.get_by_id(user_id)
