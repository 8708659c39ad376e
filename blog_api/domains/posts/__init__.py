from blog_api.domains.posts.entities import Post, Comment
from blog_api.domains.posts.schemas import (
    PostCreate, PostUpdate, PostResponse, CommentCreate, CommentResponse
)

__all__ = [
    "Post", "Comment",
    "PostCreate", "PostUpdate", "PostResponse", "CommentCreate", "CommentResponse"
]
