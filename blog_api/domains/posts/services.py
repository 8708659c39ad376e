import logging
import math
from typing import List, Optional, Tuple
from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.auth import RequestContext
from blog_api.core.errors import AppError, NotFoundError, UnauthorizedError, ValidationError
from blog_api.core.identifiers import Identifier, parse_uuid
from blog_api.core.uploads import remove_image, save_image
from blog_api.db.repositories.category_repository import CategoryRepository
from blog_api.db.repositories.post_repository import PostRepository
from blog_api.domains.posts.entities import Comment, Post
from blog_api.domains.posts.schemas import CommentCreate, PostCreate, PostUpdate

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Post not found"


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


class PostService:
    """Сервис для работы с постами и комментариями"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.post_repository = PostRepository(session)
        self.category_repository = CategoryRepository(session)

    async def list_posts(
        self,
        page: int = 1,
        limit: int = 10,
        category: Optional[str] = None,
        search: Optional[str] = None
    ) -> Tuple[List[Post], int]:
        """Страница опубликованных постов и общее количество"""
        category_id = None
        if category:
            category_id = parse_uuid(category)
            if category_id is None:
                raise ValidationError.for_field("category", "Valid category ID is required")

        search = search.strip() if search else None
        offset = (page - 1) * limit

        posts = await self.post_repository.list_published(
            category_id=category_id,
            search=search,
            limit=limit,
            offset=offset
        )
        total = await self.post_repository.count_published(category_id=category_id, search=search)

        return posts, total

    async def get_post(self, identifier: Identifier) -> Post:
        """Получение поста по id или slug"""
        post = await self.post_repository.get_by_identifier(identifier)
        if not post:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return post

    async def create_post(
        self,
        post_data: PostCreate,
        context: RequestContext,
        image: Optional[UploadFile] = None
    ) -> Post:
        """Создание поста от имени текущего пользователя"""
        await self._ensure_category(post_data.category)

        featured_image = await save_image(image)
        post = Post.create_post(
            title=post_data.title,
            content=post_data.content,
            category_id=post_data.category,
            author_id=context.user_id,
            tags=post_data.tags,
            excerpt=post_data.excerpt,
            featured_image=featured_image
        )
        if not post.slug:
            await remove_image(featured_image)
            raise ValidationError.for_field("title", "Title must contain letters or digits")

        try:
            created = await self.post_repository.create(post)
        except AppError:
            await remove_image(featured_image)
            raise

        logger.info("User %s created post %s (%s)", context.user_id, created.id, created.slug)
        return created

    async def update_post(
        self,
        identifier: Identifier,
        update_data: PostUpdate,
        context: RequestContext,
        image: Optional[UploadFile] = None
    ) -> Post:
        """Обновление поста автором или администратором"""
        post = await self.get_post(identifier)

        if not post.can_be_modified_by(context.user_id, context.is_admin):
            logger.warning("User %s may not update post %s", context.user_id, post.id)
            raise UnauthorizedError("Not authorized to update this post")

        if update_data.category is not None:
            await self._ensure_category(update_data.category)
            post.category_id = update_data.category

        if update_data.title is not None and update_data.title != post.title:
            post.update_title(update_data.title)
            if not post.slug:
                raise ValidationError.for_field("title", "Title must contain letters or digits")

        if update_data.content is not None:
            post.update_content(update_data.content, update_data.excerpt)
        elif update_data.excerpt:
            post.excerpt = update_data.excerpt

        if update_data.tags is not None:
            post.tags = update_data.tags

        previous_image = post.featured_image
        new_image = await save_image(image)
        if new_image:
            post.featured_image = new_image

        post.touch()
        try:
            updated = await self.post_repository.update(post)
        except AppError:
            await remove_image(new_image)
            raise

        if new_image and previous_image:
            await remove_image(previous_image)

        logger.info("User %s updated post %s", context.user_id, updated.id)
        return updated

    async def delete_post(self, identifier: Identifier, context: RequestContext) -> None:
        """Удаление поста автором или администратором"""
        post = await self.get_post(identifier)

        if not post.can_be_modified_by(context.user_id, context.is_admin):
            logger.warning("User %s may not delete post %s", context.user_id, post.id)
            raise UnauthorizedError("Not authorized to delete this post")

        await self.post_repository.delete(post.id)
        await remove_image(post.featured_image)
        logger.info("User %s deleted post %s", context.user_id, post.id)

    async def add_comment(
        self,
        raw_post_id: str,
        comment_data: CommentCreate,
        context: RequestContext
    ) -> Comment:
        """Добавление комментария к посту"""
        post_id = parse_uuid(raw_post_id)
        if post_id is None or not await self.post_repository.exists(post_id):
            raise NotFoundError(NOT_FOUND_MESSAGE)

        comment = Comment.create_comment(
            post_id=post_id,
            author_id=context.user_id,
            content=comment_data.content
        )
        created = await self.post_repository.add_comment(comment)
        logger.info("User %s commented on post %s", context.user_id, post_id)
        return created

    async def _ensure_category(self, category_id) -> None:
        if not await self.category_repository.exists(category_id):
            raise ValidationError.for_field("category", "Category not found")
