import uuid
from datetime import datetime, timezone
from typing import Optional

from blog_api.core.text import slugify

DEFAULT_COLOR = "#3B82F6"


class Category:
    """Сущность категории"""

    def __init__(
        self,
        id: uuid.UUID,
        name: str,
        slug: str,
        description: str = "",
        color: str = DEFAULT_COLOR,
        is_active: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        post_count: int = 0
    ):
        self.id = id
        self.name = name
        self.slug = slug
        self.description = description
        self.color = color
        self.is_active = is_active
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)
        # Вычисляется при чтении, в базе не хранится
        self.post_count = post_count

    def rename(self, new_name: str) -> None:
        """Смена названия; slug пересчитывается"""
        self.name = new_name
        self.slug = slugify(new_name)
        self.updated_at = datetime.now(timezone.utc)

    @classmethod
    def create_category(
        cls,
        name: str,
        description: str = "",
        color: str = DEFAULT_COLOR,
        is_active: bool = True
    ) -> "Category":
        """Создание новой категории"""
        return cls(
            id=uuid.uuid4(),
            name=name,
            slug=slugify(name),
            description=description,
            color=color,
            is_active=is_active
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Category):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"Category(id={self.id}, name={self.name}, slug={self.slug})"


class CategorySummary:
    """Данные категории для вложения в пост"""

    def __init__(self, id: uuid.UUID, name: str, color: str):
        self.id = id
        self.name = name
        self.color = color

    def __repr__(self) -> str:
        return f"CategorySummary(id={self.id}, name={self.name})"
