import uuid
from datetime import datetime, timezone
from typing import Optional

from blog_api.core.security import get_password_hash, verify_password

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        id: uuid.UUID,
        name: str,
        email: str,
        password_hash: str,
        role: str = ROLE_USER,
        avatar: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.role = role
        self.avatar = avatar
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def authenticate(self, password: str) -> bool:
        """Проверка пароля пользователя"""
        return verify_password(password, self.password_hash)

    def update_profile(
        self,
        name: Optional[str] = None,
        email: Optional[str] = None,
        avatar: Optional[str] = None
    ) -> None:
        """Обновление профиля пользователя"""
        if name:
            self.name = name
        if email:
            self.email = email
        if avatar is not None:
            self.avatar = avatar or None
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_user(cls, name: str, email: str, password: str, role: str = ROLE_USER) -> "User":
        """Создание нового пользователя с хешированием пароля"""
        return cls(
            id=uuid.uuid4(),
            name=name,
            email=email.lower(),
            password_hash=get_password_hash(password),
            role=role
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"


class UserSummary:
    """Публичные данные автора для вложения в посты и комментарии"""

    def __init__(self, id: uuid.UUID, name: str, avatar: Optional[str] = None):
        self.id = id
        self.name = name
        self.avatar = avatar

    def __repr__(self) -> str:
        return f"UserSummary(id={self.id}, name={self.name})"
