from sqlalchemy import Column, String, Boolean
from sqlalchemy.orm import relationship

from blog_api.db.base import BaseModel


class Category(BaseModel):
    __tablename__ = "categories"

    name = Column(String(50), unique=True, nullable=False)
    slug = Column(String(60), unique=True, index=True, nullable=False)
    description = Column(String(200), nullable=False, default="")
    color = Column(String(7), nullable=False, default="#3B82F6")  # Hex color code
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    posts = relationship("Post", back_populates="category")
