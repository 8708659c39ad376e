from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
import uuid

from blog_api.core.identifiers import parse_uuid
from blog_api.core.schemas import CamelModel
from blog_api.core.text import split_tags
from blog_api.domains.categories.schemas import CategorySummaryResponse
from blog_api.domains.identity.schemas import UserSummaryResponse

TITLE_MAX_LENGTH = 100


def _clean_title(v):
    if not isinstance(v, str) or not 1 <= len(v.strip()) <= TITLE_MAX_LENGTH:
        raise ValueError('Title must be between 1 and 100 characters')
    return v.strip()


def _clean_content(v):
    if not isinstance(v, str) or not v.strip():
        raise ValueError('Content is required')
    return v.strip()


def _clean_category(v):
    if isinstance(v, uuid.UUID):
        return v
    value = parse_uuid(v) if isinstance(v, str) else None
    if value is None:
        raise ValueError('Valid category ID is required')
    return value


def _clean_tags(v):
    if v is None:
        return v
    if isinstance(v, str):
        return split_tags(v)
    return [str(tag).strip() for tag in v if str(tag).strip()]


class PostCreate(CamelModel):
    """Схема для создания поста"""
    title: str
    content: str
    category: uuid.UUID
    tags: List[str] = Field(default_factory=list)
    excerpt: Optional[str] = Field(None, max_length=200)

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)

    @field_validator('content', mode='before')
    @classmethod
    def validate_content(cls, v):
        return _clean_content(v)

    @field_validator('category', mode='before')
    @classmethod
    def validate_category(cls, v):
        return _clean_category(v)

    @field_validator('tags', mode='before')
    @classmethod
    def validate_tags(cls, v):
        return _clean_tags(v) or []


class PostUpdate(CamelModel):
    """Схема для обновления поста; пропущенные поля не меняются"""
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[uuid.UUID] = None
    tags: Optional[List[str]] = None
    excerpt: Optional[str] = Field(None, max_length=200)

    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return v if v is None else _clean_title(v)

    @field_validator('content', mode='before')
    @classmethod
    def validate_content(cls, v):
        return v if v is None else _clean_content(v)

    @field_validator('category', mode='before')
    @classmethod
    def validate_category(cls, v):
        return v if v is None else _clean_category(v)

    @field_validator('tags', mode='before')
    @classmethod
    def validate_tags(cls, v):
        return _clean_tags(v)


class CommentCreate(CamelModel):
    """Схема для добавления комментария"""
    content: str

    @field_validator('content', mode='before')
    @classmethod
    def validate_content(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError('Comment content is required')
        return v.strip()


class CommentResponse(CamelModel):
    id: uuid.UUID
    author: Optional[UserSummaryResponse] = None
    content: str
    created_at: datetime


class PostResponse(CamelModel):
    """Схема для ответа с данными поста"""
    id: uuid.UUID
    title: str
    slug: str
    content: str
    excerpt: str
    category: Optional[CategorySummaryResponse] = None
    author: Optional[UserSummaryResponse] = None
    tags: List[str]
    featured_image: Optional[str] = None
    is_published: bool
    view_count: int
    comments: List[CommentResponse]
    created_at: datetime
    updated_at: datetime
