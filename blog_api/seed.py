"""
Заполнение базы демонстрационными данными.

    python -m blog_api.seed [--reset]

Создает категории, администратора admin@example.com и несколько постов.
Существующие записи пропускаются; с --reset посты и категории удаляются заранее.
"""
import argparse
import asyncio
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.config import settings
from blog_api.core.db import SessionLocal, init_models
from blog_api.core.logging import configure_logging
from blog_api.db.models import (
    Category as CategoryModel, Comment as CommentModel, Post as PostModel, PostTag as PostTagModel
)
from blog_api.db.repositories import CategoryRepository, PostRepository, UserRepository
from blog_api.domains.categories.entities import Category
from blog_api.domains.identity.entities import User, ROLE_ADMIN
from blog_api.domains.posts.entities import Post

logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "password123"

SAMPLE_CATEGORIES = [
    ("Technology", "Latest tech trends and innovations", "#3B82F6"),
    ("Programming", "Coding tutorials and development tips", "#10B981"),
    ("Web Development", "Frontend and backend development", "#F59E0B"),
    ("Databases", "Database and data management", "#8B5CF6"),
    ("React", "React.js tutorials and best practices", "#06B6D4"),
    ("Python", "Python language and ecosystem", "#3776AB"),
    ("API Development", "Building and consuming RESTful APIs", "#FF6B6B"),
    ("DevOps", "Development operations and deployment", "#45B7D1"),
]

SAMPLE_POSTS = [
    (
        "Getting Started with FastAPI",
        "FastAPI is a modern web framework for building APIs with Python based on "
        "standard type hints. It validates requests with pydantic, generates OpenAPI "
        "documentation automatically and runs on any ASGI server.\n\n"
        "This post walks through creating a first application, declaring path and "
        "query parameters and returning JSON responses.",
        ["fastapi", "python", "tutorial"],
    ),
    (
        "Understanding SQL Aggregation",
        "Aggregation lets you process rows and return computed results. GROUP BY "
        "collects rows that share a key, and functions such as COUNT, SUM and AVG "
        "summarize each group.\n\n"
        "Combined with HAVING and window functions it covers most reporting needs.",
        ["sql", "database", "aggregation"],
    ),
    (
        "React Hooks Best Practices",
        "React Hooks let functional components use state and other React features. "
        "Keep hooks at the top level, name custom hooks with the use prefix and list "
        "every dependency of useEffect.\n\n"
        "Extracting logic into custom hooks keeps components small and testable.",
        ["react", "hooks", "javascript", "frontend"],
    ),
    (
        "Async SQLAlchemy in Practice",
        "SQLAlchemy 2.0 ships a first-class asyncio extension. An AsyncSession per "
        "request, eager loading with selectinload and explicit commits keep async "
        "code free of implicit IO.",
        ["sqlalchemy", "python", "async"],
    ),
    (
        "Designing RESTful APIs",
        "Good REST APIs use nouns for resources, HTTP verbs for actions and status "
        "codes that mean what they say. Consistent envelopes and pagination make "
        "clients simpler.",
        ["api", "rest", "design"],
    ),
]


async def reset(session: AsyncSession) -> None:
    await session.execute(delete(CommentModel))
    await session.execute(delete(PostTagModel))
    await session.execute(delete(PostModel))
    await session.execute(delete(CategoryModel))
    await session.commit()
    logger.info("Cleared existing posts and categories")


async def seed(session: AsyncSession) -> None:
    user_repository = UserRepository(session)
    category_repository = CategoryRepository(session)
    post_repository = PostRepository(session)

    admin = await user_repository.get_by_email(ADMIN_EMAIL)
    if not admin:
        admin = await user_repository.create(
            User.create_user("Admin User", ADMIN_EMAIL, ADMIN_PASSWORD, role=ROLE_ADMIN)
        )
        logger.info("Created default user %s / %s", ADMIN_EMAIL, ADMIN_PASSWORD)

    categories = []
    for name, description, color in SAMPLE_CATEGORIES:
        result = await session.execute(select(CategoryModel.id).where(CategoryModel.name == name))
        existing_id = result.scalar_one_or_none()
        if existing_id:
            categories.append(await category_repository.get_by_id(existing_id))
            continue
        categories.append(
            await category_repository.create(Category.create_category(name, description, color))
        )
    logger.info("Categories: %s", ", ".join(c.name for c in categories))

    created = 0
    for index, (title, content, tags) in enumerate(SAMPLE_POSTS):
        result = await session.execute(select(PostModel.id).where(PostModel.title == title))
        if result.scalar_one_or_none():
            continue
        post = Post.create_post(
            title=title,
            content=content,
            category_id=categories[index % len(categories)].id,
            author_id=admin.id,
            tags=tags
        )
        await post_repository.create(post)
        created += 1
    logger.info("Created %d posts", created)


async def main(reset_first: bool = False) -> None:
    await init_models()
    async with SessionLocal() as session:
        if reset_first:
            await reset(session)
        await seed(session)


def run() -> None:
    parser = argparse.ArgumentParser(description="Seed the blog database with sample data")
    parser.add_argument("--reset", action="store_true", help="delete posts and categories first")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    asyncio.run(main(reset_first=args.reset))


if __name__ == "__main__":
    run()
