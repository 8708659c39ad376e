from blog_api.db.repositories.user_repository import UserRepository
from blog_api.db.repositories.category_repository import CategoryRepository
from blog_api.db.repositories.post_repository import PostRepository

__all__ = [
    "UserRepository",
    "CategoryRepository",
    "PostRepository"
]
