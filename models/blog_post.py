from sqlalchemy import Boolean, Column, ForeignKey, JSON, String, Text

from database import Base
from .base import id_column, created_at_column, updated_at_column


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id = id_column()
    title = Column(String, nullable=False)
    slug = Column(String, nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=False)
    category = Column(String, nullable=False, default="General")
    tags = Column(JSON, nullable=False, default=list)
    featured_image = Column(String, nullable=True)
    published = Column(Boolean, nullable=False, default=False)
    author_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = created_at_column()
    updated_at = updated_at_column()
