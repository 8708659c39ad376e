import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.db import get_db
from blog_api.core.errors import ForbiddenError, UnauthorizedError
from blog_api.domains.identity.entities import User, ROLE_ADMIN
from blog_api.domains.identity.services import IdentityService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class RequestContext:
    """Пользователь, от имени которого выполняется запрос"""
    user_id: uuid.UUID
    role: str
    user: User

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


async def get_request_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> RequestContext:
    """Зависимость: проверка bearer токена и загрузка пользователя"""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthorizedError()

    identity_service = IdentityService(db)
    user = await identity_service.get_current_user_from_token(credentials.credentials)

    if not user:
        logger.warning("Rejected bearer token")
        raise UnauthorizedError()

    return RequestContext(user_id=user.id, role=user.role, user=user)


def require_role(*roles: str):
    """Фабрика зависимостей для проверки роли пользователя"""

    async def checker(context: RequestContext = Depends(get_request_context)) -> RequestContext:
        if context.role not in roles:
            logger.warning("User %s with role %s denied", context.user_id, context.role)
            raise ForbiddenError(f"User role {context.role} is not authorized to access this route")
        return context

    return checker
