from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from blog_api.core.auth import RequestContext, get_request_context
from blog_api.core.db import get_db
from blog_api.core.errors import ValidationError
from blog_api.core.identifiers import parse_identifier
from blog_api.core.schemas import Envelope, PageEnvelope, Pagination
from blog_api.domains.categories.schemas import CategorySummaryResponse
from blog_api.domains.identity.schemas import UserSummaryResponse
from blog_api.domains.posts.entities import Comment, Post
from blog_api.domains.posts.schemas import (
    CommentCreate, CommentResponse, PostCreate, PostResponse, PostUpdate
)
from blog_api.domains.posts.services import PostService, page_count

router = APIRouter(prefix="/posts", tags=["posts"])


def _author_response(author) -> Optional[UserSummaryResponse]:
    if author is None:
        return None
    return UserSummaryResponse(id=author.id, name=author.name, avatar=author.avatar)


def comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        author=_author_response(comment.author),
        content=comment.content,
        created_at=comment.created_at
    )


def post_response(post: Post) -> PostResponse:
    category = post.category
    return PostResponse(
        id=post.id,
        title=post.title,
        slug=post.slug,
        content=post.content,
        excerpt=post.excerpt,
        category=CategorySummaryResponse(id=category.id, name=category.name, color=category.color) if category else None,
        author=_author_response(post.author),
        tags=post.tags,
        featured_image=post.featured_image,
        is_published=post.is_published,
        view_count=post.view_count,
        comments=[comment_response(c) for c in post.comments],
        created_at=post.created_at,
        updated_at=post.updated_at
    )


async def post_create_form(
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    excerpt: Optional[str] = Form(None)
) -> PostCreate:
    """Поля поста из multipart формы"""
    try:
        return PostCreate(title=title, content=content, category=category, tags=tags, excerpt=excerpt or None)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)


async def post_update_form(
    title: Optional[str] = Form(None),
    content: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
    excerpt: Optional[str] = Form(None)
) -> PostUpdate:
    try:
        return PostUpdate(title=title, content=content, category=category, tags=tags, excerpt=excerpt or None)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)


@router.get("", response_model=PageEnvelope[PostResponse])
async def list_posts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Список опубликованных постов с фильтрами и пагинацией"""
    post_service = PostService(db)

    posts, total = await post_service.list_posts(page=page, limit=limit, category=category, search=search)

    return PageEnvelope[PostResponse](
        data=[post_response(post) for post in posts],
        pagination=Pagination(page=page, limit=limit, total=total, pages=page_count(total, limit))
    )


@router.get("/{id_or_slug}", response_model=Envelope[PostResponse])
async def get_post(
    id_or_slug: str,
    db: AsyncSession = Depends(get_db)
):
    """Получение поста по id или slug"""
    post_service = PostService(db)

    post = await post_service.get_post(parse_identifier(id_or_slug))

    return Envelope[PostResponse](data=post_response(post))


@router.post("", response_model=Envelope[PostResponse], status_code=status.HTTP_201_CREATED)
async def create_post(
    context: RequestContext = Depends(get_request_context),
    post_data: PostCreate = Depends(post_create_form),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового поста"""
    post_service = PostService(db)

    post = await post_service.create_post(post_data, context, image)

    return Envelope[PostResponse](data=post_response(post))


@router.put("/{id_or_slug}", response_model=Envelope[PostResponse])
async def update_post(
    id_or_slug: str,
    context: RequestContext = Depends(get_request_context),
    update_data: PostUpdate = Depends(post_update_form),
    image: Optional[UploadFile] = File(None),
    db: AsyncSession = Depends(get_db)
):
    """Обновление поста"""
    post_service = PostService(db)

    post = await post_service.update_post(parse_identifier(id_or_slug), update_data, context, image)

    return Envelope[PostResponse](data=post_response(post))


@router.delete("/{id_or_slug}", response_model=Envelope[dict])
async def delete_post(
    id_or_slug: str,
    context: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Удаление поста"""
    post_service = PostService(db)

    await post_service.delete_post(parse_identifier(id_or_slug), context)

    return Envelope[dict](data={})


@router.post("/{post_id}/comments", response_model=Envelope[CommentResponse], status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: str,
    comment_data: CommentCreate,
    context: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Добавление комментария к посту"""
    post_service = PostService(db)

    comment = await post_service.add_comment(post_id, comment_data, context)

    return Envelope[CommentResponse](data=comment_response(comment))
