from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from blog_api.db.base import BaseModel


class User(BaseModel):
    __tablename__ = "users"

    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user")
    avatar = Column(String(500), nullable=True)

    # Relationships
    posts = relationship("Post", back_populates="author")
