from blog_api.db.models.user import User
from blog_api.db.models.category import Category
from blog_api.db.models.post import Post, PostTag, Comment

__all__ = [
    "User",
    "Category",
    "Post",
    "PostTag",
    "Comment"
]
