import uuid
from datetime import datetime, timezone
from typing import List, Optional

from blog_api.core.text import make_excerpt, slugify
from blog_api.domains.categories.entities import CategorySummary
from blog_api.domains.identity.entities import UserSummary


class Comment:
    """Комментарий к посту; только добавляется"""

    def __init__(
        self,
        id: uuid.UUID,
        post_id: uuid.UUID,
        author_id: uuid.UUID,
        content: str,
        created_at: Optional[datetime] = None,
        author: Optional[UserSummary] = None
    ):
        self.id = id
        self.post_id = post_id
        self.author_id = author_id
        self.content = content
        self.created_at = created_at or datetime.now(timezone.utc)
        self.author = author

    @classmethod
    def create_comment(cls, post_id: uuid.UUID, author_id: uuid.UUID, content: str) -> "Comment":
        return cls(
            id=uuid.uuid4(),
            post_id=post_id,
            author_id=author_id,
            content=content.strip()
        )

    def __repr__(self) -> str:
        return f"Comment(id={self.id}, post_id={self.post_id}, author_id={self.author_id})"


class Post:
    """Сущность поста блога"""

    def __init__(
        self,
        id: uuid.UUID,
        title: str,
        slug: str,
        content: str,
        category_id: uuid.UUID,
        author_id: uuid.UUID,
        excerpt: str = "",
        tags: Optional[List[str]] = None,
        featured_image: Optional[str] = None,
        is_published: bool = False,
        view_count: int = 0,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        author: Optional[UserSummary] = None,
        category: Optional[CategorySummary] = None,
        comments: Optional[List[Comment]] = None
    ):
        self.id = id
        self.title = title
        self.slug = slug
        self.content = content
        self.excerpt = excerpt
        self.category_id = category_id
        self.author_id = author_id
        self.tags = list(tags or [])
        self.featured_image = featured_image
        self.is_published = is_published
        self.view_count = view_count
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)
        self.author = author
        self.category = category
        self.comments = list(comments or [])

    def can_be_modified_by(self, user_id: uuid.UUID, is_admin: bool) -> bool:
        """Изменять пост может автор или администратор"""
        return is_admin or self.author_id == user_id

    def update_title(self, new_title: str) -> None:
        """Обновление заголовка; slug пересчитывается"""
        self.title = new_title
        self.slug = slugify(new_title)
        self.updated_at = datetime.now(timezone.utc)

    def update_content(self, new_content: str, excerpt: Optional[str] = None) -> None:
        self.content = new_content
        self.excerpt = excerpt if excerpt else make_excerpt(new_content)
        self.updated_at = datetime.now(timezone.utc)

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_post(
        cls,
        title: str,
        content: str,
        category_id: uuid.UUID,
        author_id: uuid.UUID,
        tags: Optional[List[str]] = None,
        excerpt: Optional[str] = None,
        featured_image: Optional[str] = None
    ) -> "Post":
        """Создание нового опубликованного поста"""
        return cls(
            id=uuid.uuid4(),
            title=title,
            slug=slugify(title),
            content=content,
            excerpt=excerpt or make_excerpt(content),
            category_id=category_id,
            author_id=author_id,
            tags=tags,
            featured_image=featured_image,
            is_published=True
        )

    def __repr__(self) -> str:
        return f"Post(id={self.id}, slug={self.slug}, author_id={self.author_id})"
