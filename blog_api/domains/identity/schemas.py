from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime
import uuid

from blog_api.core.schemas import CamelModel


class UserCreate(BaseModel):
    """Схема для регистрации пользователя"""
    name: str = Field(..., max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Name must be between 1 and 50 characters')
        return v.strip()


class UserLogin(BaseModel):
    """Схема для входа пользователя"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Схема для обновления профиля"""
    name: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = Field(None, max_length=500)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Name must be between 1 and 50 characters')
        return v.strip() if v else v


class UserSummaryResponse(CamelModel):
    """Автор поста или комментария"""
    id: uuid.UUID
    name: str
    avatar: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(CamelModel):
    """Схема для ответа с данными пользователя"""
    id: uuid.UUID
    name: str
    email: str
    role: str
    avatar: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthPayload(BaseModel):
    """Токен и данные пользователя после входа или регистрации"""
    token: str
    user: UserResponse
