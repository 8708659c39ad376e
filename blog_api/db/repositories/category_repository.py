from typing import Dict, Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, or_
from sqlalchemy.exc import IntegrityError
import uuid

from blog_api.core.errors import ConflictError
from blog_api.core.identifiers import EntityId, Identifier
from blog_api.db.models.category import Category as CategoryModel
from blog_api.db.models.post import Post as PostModel
from blog_api.domains.categories.entities import Category

DUPLICATE_MESSAGE = "A category with this name already exists"


def identifier_clause(model, identifier: Identifier):
    """Условие поиска по id или slug"""
    if isinstance(identifier, EntityId):
        return or_(model.id == identifier.value, model.slug == identifier.text)
    return model.slug == identifier.value


class CategoryRepository:
    """Репозиторий для работы с категориями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, category: Category) -> Category:
        """Создание новой категории"""
        db_category = CategoryModel(
            id=category.id,
            name=category.name,
            slug=category.slug,
            description=category.description,
            color=category.color,
            is_active=category.is_active
        )

        self.session.add(db_category)
        try:
            await self.session.commit()
            await self.session.refresh(db_category)
            return self._to_domain(db_category)
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(DUPLICATE_MESSAGE)

    async def get_by_id(self, category_id: uuid.UUID) -> Optional[Category]:
        """Получение категории по id"""
        result = await self.session.execute(
            select(CategoryModel).where(CategoryModel.id == category_id)
            .execution_options(populate_existing=True)
        )
        db_category = result.scalar_one_or_none()
        return self._to_domain(db_category) if db_category else None

    async def get_active(self, identifier: Identifier) -> Optional[Category]:
        """Получение активной категории по id или slug"""
        result = await self.session.execute(
            select(CategoryModel)
            .where(identifier_clause(CategoryModel, identifier))
            .where(CategoryModel.is_active.is_(True))
            .limit(1)
        )
        db_category = result.scalar_one_or_none()
        if not db_category:
            return None
        counts = await self.post_counts([db_category.id])
        return self._to_domain(db_category, counts.get(db_category.id, 0))

    async def list_active(self) -> List[Category]:
        """Активные категории по алфавиту вместе с количеством постов"""
        result = await self.session.execute(
            select(CategoryModel)
            .where(CategoryModel.is_active.is_(True))
            .order_by(CategoryModel.name.asc())
        )
        db_categories = result.scalars().all()
        counts = await self.post_counts(c.id for c in db_categories)
        return [self._to_domain(c, counts.get(c.id, 0)) for c in db_categories]

    async def exists(self, category_id: uuid.UUID) -> bool:
        """Проверка существования категории"""
        result = await self.session.execute(
            select(CategoryModel.id).where(CategoryModel.id == category_id)
        )
        return result.scalar_one_or_none() is not None

    async def update(self, category: Category) -> Category:
        """Обновление категории"""
        stmt = (
            update(CategoryModel)
            .where(CategoryModel.id == category.id)
            .values(
                name=category.name,
                slug=category.slug,
                description=category.description,
                color=category.color,
                is_active=category.is_active,
                updated_at=category.updated_at
            )
        )

        try:
            await self.session.execute(stmt)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(DUPLICATE_MESSAGE)

        updated = await self.get_by_id(category.id)
        updated.post_count = await self.count_posts(category.id)
        return updated

    async def delete(self, category_id: uuid.UUID) -> bool:
        """Удаление категории"""
        stmt = delete(CategoryModel).where(CategoryModel.id == category_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    async def count_posts(self, category_id: uuid.UUID) -> int:
        """Количество постов, ссылающихся на категорию"""
        result = await self.session.execute(
            select(func.count(PostModel.id)).where(PostModel.category_id == category_id)
        )
        return result.scalar()

    async def post_counts(self, category_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, int]:
        """Количество постов для нескольких категорий одним запросом"""
        ids = list(category_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(PostModel.category_id, func.count(PostModel.id))
            .where(PostModel.category_id.in_(ids))
            .group_by(PostModel.category_id)
        )
        return {category_id: count for category_id, count in result.all()}

    def _to_domain(self, db_category: CategoryModel, post_count: int = 0) -> Category:
        """Преобразование модели БД в доменную сущность"""
        return Category(
            id=db_category.id,
            name=db_category.name,
            slug=db_category.slug,
            description=db_category.description,
            color=db_category.color,
            is_active=db_category.is_active,
            created_at=db_category.created_at,
            updated_at=db_category.updated_at,
            post_count=post_count
        )
