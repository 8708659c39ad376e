from pydantic import ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
import uuid

from blog_api.core.schemas import CamelModel
from blog_api.domains.categories.entities import DEFAULT_COLOR

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


def _clean_name(v):
    if v is None:
        return v
    v = v.strip()
    if not 1 <= len(v) <= 50:
        raise ValueError('Category name must be between 1 and 50 characters')
    return v


def _clean_description(v):
    if v is None:
        return v
    v = v.strip()
    if len(v) > 200:
        raise ValueError('Description cannot exceed 200 characters')
    return v


class CategoryCreate(CamelModel):
    """Схема для создания категории"""
    name: str
    description: str = ""
    color: str = Field(DEFAULT_COLOR, pattern=HEX_COLOR)
    is_active: bool = True

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return _clean_description(v)


class CategoryUpdate(CamelModel):
    """Схема для обновления категории"""
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = Field(None, pattern=HEX_COLOR)
    is_active: Optional[bool] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return _clean_description(v)


class CategorySummaryResponse(CamelModel):
    id: uuid.UUID
    name: str
    color: str

    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(CamelModel):
    """Схема для ответа с данными категории"""
    id: uuid.UUID
    name: str
    slug: str
    description: str
    color: str
    is_active: bool
    post_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
