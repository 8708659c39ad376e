import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.errors import ConflictError, NotFoundError, ValidationError
from blog_api.core.identifiers import Identifier, parse_uuid
from blog_api.db.repositories.category_repository import CategoryRepository
from blog_api.domains.categories.entities import Category
from blog_api.domains.categories.schemas import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Category not found"


class CategoryService:
    """Сервис для работы с категориями"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.category_repository = CategoryRepository(session)

    async def list_categories(self) -> List[Category]:
        """Активные категории с количеством постов"""
        return await self.category_repository.list_active()

    async def get_category(self, identifier: Identifier) -> Category:
        """Получение активной категории по id или slug"""
        category = await self.category_repository.get_active(identifier)
        if not category:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return category

    async def create_category(self, category_data: CategoryCreate) -> Category:
        """Создание категории"""
        category = Category.create_category(
            name=category_data.name,
            description=category_data.description,
            color=category_data.color,
            is_active=category_data.is_active
        )
        if not category.slug:
            raise ValidationError.for_field("name", "Category name must contain letters or digits")

        created = await self.category_repository.create(category)
        logger.info("Created category %s (%s)", created.id, created.slug)
        return created

    async def update_category(self, raw_id: str, update_data: CategoryUpdate) -> Category:
        """Частичное обновление категории"""
        category = await self._get_by_raw_id(raw_id)

        if update_data.name is not None and update_data.name != category.name:
            category.rename(update_data.name)
            if not category.slug:
                raise ValidationError.for_field("name", "Category name must contain letters or digits")
        if update_data.description is not None:
            category.description = update_data.description
        if update_data.color is not None:
            category.color = update_data.color
        if update_data.is_active is not None:
            category.is_active = update_data.is_active

        updated = await self.category_repository.update(category)
        logger.info("Updated category %s", updated.id)
        return updated

    async def delete_category(self, raw_id: str) -> None:
        """Удаление категории без постов"""
        category = await self._get_by_raw_id(raw_id)

        if await self.category_repository.count_posts(category.id) > 0:
            raise ConflictError("Cannot delete category with existing posts")

        await self.category_repository.delete(category.id)
        logger.info("Deleted category %s", category.id)

    async def _get_by_raw_id(self, raw_id: str) -> Category:
        category_id = parse_uuid(raw_id)
        category = await self.category_repository.get_by_id(category_id) if category_id else None
        if not category:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return category
