from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey, UUID
from sqlalchemy.orm import relationship

from blog_api.db.base import BaseModel


class Post(BaseModel):
    __tablename__ = "posts"

    title = Column(String(100), unique=True, nullable=False)
    slug = Column(String(120), unique=True, index=True, nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(String(210), nullable=False, default="")
    category_id = Column(UUID(as_uuid=True), ForeignKey("categories.id"), nullable=False, index=True)
    author_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    featured_image = Column(String(255), nullable=True)
    is_published = Column(Boolean, nullable=False, default=False)
    view_count = Column(Integer, nullable=False, default=0)

    # Relationships
    author = relationship("User", back_populates="posts")
    category = relationship("Category", back_populates="posts")
    tags = relationship(
        "PostTag",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostTag.position",
    )
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )


class PostTag(BaseModel):
    __tablename__ = "post_tags"

    post_id = Column(UUID(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    name = Column(String(100), nullable=False, index=True)

    # Relationships
    post = relationship("Post", back_populates="tags")


class Comment(BaseModel):
    __tablename__ = "comments"

    post_id = Column(UUID(as_uuid=True), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)

    # Relationships
    post = relationship("Post", back_populates="comments")
    author = relationship("User")
