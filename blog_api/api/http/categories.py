from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from blog_api.core.auth import RequestContext, require_role
from blog_api.core.db import get_db
from blog_api.core.identifiers import parse_identifier
from blog_api.core.schemas import Envelope
from blog_api.domains.categories.entities import Category
from blog_api.domains.categories.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from blog_api.domains.categories.services import CategoryService
from blog_api.domains.identity.entities import ROLE_ADMIN

router = APIRouter(prefix="/categories", tags=["categories"])

admin_only = require_role(ROLE_ADMIN)


def category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        name=category.name,
        slug=category.slug,
        description=category.description,
        color=category.color,
        is_active=category.is_active,
        post_count=category.post_count,
        created_at=category.created_at,
        updated_at=category.updated_at
    )


@router.get("", response_model=Envelope[List[CategoryResponse]])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """Список активных категорий"""
    category_service = CategoryService(db)

    categories = await category_service.list_categories()

    return Envelope[List[CategoryResponse]](data=[category_response(c) for c in categories])


@router.get("/{id_or_slug}", response_model=Envelope[CategoryResponse])
async def get_category(
    id_or_slug: str,
    db: AsyncSession = Depends(get_db)
):
    """Получение категории по id или slug"""
    category_service = CategoryService(db)

    category = await category_service.get_category(parse_identifier(id_or_slug))

    return Envelope[CategoryResponse](data=category_response(category))


@router.post("", response_model=Envelope[CategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    context: RequestContext = Depends(admin_only),
    db: AsyncSession = Depends(get_db)
):
    """Создание категории (только администратор)"""
    category_service = CategoryService(db)

    category = await category_service.create_category(category_data)

    return Envelope[CategoryResponse](data=category_response(category))


@router.put("/{category_id}", response_model=Envelope[CategoryResponse])
async def update_category(
    category_id: str,
    update_data: CategoryUpdate,
    context: RequestContext = Depends(admin_only),
    db: AsyncSession = Depends(get_db)
):
    """Обновление категории (только администратор)"""
    category_service = CategoryService(db)

    category = await category_service.update_category(category_id, update_data)

    return Envelope[CategoryResponse](data=category_response(category))


@router.delete("/{category_id}", response_model=Envelope[dict])
async def delete_category(
    category_id: str,
    context: RequestContext = Depends(admin_only),
    db: AsyncSession = Depends(get_db)
):
    """Удаление категории без постов (только администратор)"""
    category_service = CategoryService(db)

    await category_service.delete_category(category_id)

    return Envelope[dict](data={})
