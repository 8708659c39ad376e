from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
import uuid

from blog_api.core.errors import ConflictError
from blog_api.core.identifiers import Identifier
from blog_api.core.text import escape_like
from blog_api.db.models.post import Post as PostModel, PostTag as PostTagModel, Comment as CommentModel
from blog_api.db.repositories.category_repository import identifier_clause
from blog_api.domains.categories.entities import CategorySummary
from blog_api.domains.identity.entities import UserSummary
from blog_api.domains.posts.entities import Post, Comment

DUPLICATE_MESSAGE = "A post with this title already exists"


def _populated():
    """Загрузка автора, категории, тегов и комментариев вместе с постом"""
    return (
        selectinload(PostModel.author),
        selectinload(PostModel.category),
        selectinload(PostModel.tags),
        selectinload(PostModel.comments).selectinload(CommentModel.author),
    )


def _tag_rows(tags: List[str]) -> List[PostTagModel]:
    return [PostTagModel(position=position, name=name) for position, name in enumerate(tags)]


class PostRepository:
    """Репозиторий для работы с постами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, post: Post) -> Post:
        """Создание нового поста"""
        db_post = PostModel(
            id=post.id,
            title=post.title,
            slug=post.slug,
            content=post.content,
            excerpt=post.excerpt,
            category_id=post.category_id,
            author_id=post.author_id,
            tags=_tag_rows(post.tags),
            featured_image=post.featured_image,
            is_published=post.is_published,
            view_count=post.view_count
        )

        self.session.add(db_post)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(DUPLICATE_MESSAGE)

        return await self.get_by_id(post.id)

    async def get_by_id(self, post_id: uuid.UUID) -> Optional[Post]:
        """Получение поста по id"""
        result = await self.session.execute(
            select(PostModel)
            .where(PostModel.id == post_id)
            .options(*_populated())
            .execution_options(populate_existing=True)
        )
        db_post = result.scalar_one_or_none()
        return self._to_domain(db_post) if db_post else None

    async def get_by_identifier(self, identifier: Identifier) -> Optional[Post]:
        """Получение поста по id или slug"""
        result = await self.session.execute(
            select(PostModel)
            .where(identifier_clause(PostModel, identifier))
            .options(*_populated())
            .limit(1)
        )
        db_post = result.scalar_one_or_none()
        return self._to_domain(db_post) if db_post else None

    def _published_query(self, category_id: Optional[uuid.UUID], search: Optional[str]):
        conditions = [PostModel.is_published.is_(True)]

        if category_id:
            conditions.append(PostModel.category_id == category_id)

        if search:
            pattern = f"%{escape_like(search)}%"
            conditions.append(
                or_(
                    PostModel.title.ilike(pattern, escape="\\"),
                    PostModel.content.ilike(pattern, escape="\\"),
                    # каждый тег сравнивается отдельно
                    PostModel.tags.any(PostTagModel.name.ilike(pattern, escape="\\")),
                )
            )

        return conditions

    async def list_published(
        self,
        category_id: Optional[uuid.UUID] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0
    ) -> List[Post]:
        """Опубликованные посты, новые первыми"""
        conditions = self._published_query(category_id, search)
        result = await self.session.execute(
            select(PostModel)
            .where(*conditions)
            .options(*_populated())
            .order_by(PostModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        db_posts = result.scalars().all()
        return [self._to_domain(post) for post in db_posts]

    async def count_published(
        self,
        category_id: Optional[uuid.UUID] = None,
        search: Optional[str] = None
    ) -> int:
        """Подсчет опубликованных постов по тем же фильтрам"""
        conditions = self._published_query(category_id, search)
        result = await self.session.execute(
            select(func.count(PostModel.id)).where(*conditions)
        )
        return result.scalar()

    async def update(self, post: Post) -> Post:
        """Обновление поста"""
        stmt = (
            update(PostModel)
            .where(PostModel.id == post.id)
            .values(
                title=post.title,
                slug=post.slug,
                content=post.content,
                excerpt=post.excerpt,
                category_id=post.category_id,
                featured_image=post.featured_image,
                updated_at=post.updated_at
            )
        )

        try:
            # теги заменяются целиком с сохранением порядка
            await self.session.execute(delete(PostTagModel).where(PostTagModel.post_id == post.id))
            for tag in _tag_rows(post.tags):
                tag.post_id = post.id
                self.session.add(tag)
            await self.session.execute(stmt)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(DUPLICATE_MESSAGE)

        return await self.get_by_id(post.id)

    async def delete(self, post_id: uuid.UUID) -> bool:
        """Удаление поста вместе с комментариями и тегами"""
        await self.session.execute(delete(CommentModel).where(CommentModel.post_id == post_id))
        await self.session.execute(delete(PostTagModel).where(PostTagModel.post_id == post_id))
        result = await self.session.execute(delete(PostModel).where(PostModel.id == post_id))
        await self.session.commit()
        return result.rowcount > 0

    async def exists(self, post_id: uuid.UUID) -> bool:
        result = await self.session.execute(
            select(PostModel.id).where(PostModel.id == post_id)
        )
        return result.scalar_one_or_none() is not None

    async def add_comment(self, comment: Comment) -> Comment:
        """Добавление комментария в конец списка"""
        db_comment = CommentModel(
            id=comment.id,
            post_id=comment.post_id,
            author_id=comment.author_id,
            content=comment.content
        )

        self.session.add(db_comment)
        await self.session.commit()

        result = await self.session.execute(
            select(CommentModel)
            .where(CommentModel.id == comment.id)
            .options(selectinload(CommentModel.author))
            .execution_options(populate_existing=True)
        )
        return self._comment_to_domain(result.scalar_one())

    def _comment_to_domain(self, db_comment: CommentModel) -> Comment:
        author = db_comment.author
        return Comment(
            id=db_comment.id,
            post_id=db_comment.post_id,
            author_id=db_comment.author_id,
            content=db_comment.content,
            created_at=db_comment.created_at,
            author=UserSummary(id=author.id, name=author.name, avatar=author.avatar) if author else None
        )

    def _to_domain(self, db_post: PostModel) -> Post:
        """Преобразование модели БД в доменную сущность"""
        author = db_post.author
        category = db_post.category

        return Post(
            id=db_post.id,
            title=db_post.title,
            slug=db_post.slug,
            content=db_post.content,
            excerpt=db_post.excerpt,
            category_id=db_post.category_id,
            author_id=db_post.author_id,
            tags=[tag.name for tag in db_post.tags],
            featured_image=db_post.featured_image,
            is_published=db_post.is_published,
            view_count=db_post.view_count,
            created_at=db_post.created_at,
            updated_at=db_post.updated_at,
            author=UserSummary(id=author.id, name=author.name, avatar=author.avatar) if author else None,
            category=CategorySummary(id=category.id, name=category.name, color=category.color) if category else None,
            comments=[self._comment_to_domain(c) for c in db_post.comments]
        )
