from sqlalchemy import Boolean, Column, String, Text

from database import Base
from .base import id_column, created_at_column, updated_at_column


class SuccessStory(Base):
    __tablename__ = "success_stories"

    id = id_column()
    title = Column(String, nullable=False)
    client_name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String, nullable=False, default="Agriculture")
    location = Column(String, nullable=False)
    area_size = Column(String, nullable=False)
    water_savings = Column(String, nullable=True)
    yield_increase = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)
    completed_date = Column(String, nullable=False)
    featured = Column(Boolean, nullable=False, default=False)
    active = Column(Boolean, nullable=False, default=True)
    created_at = created_at_column()
    updated_at = updated_at_column()
